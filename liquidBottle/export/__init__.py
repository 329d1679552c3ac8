# -- Export Package -- #

'''
Data export utilities for slosh session results.

Exports frame data as JSON for the Manim bottle animation and
for offline inspection.

Sean Bowman [10/18/2026]
'''

from liquidBottle.export.frameExporter import FrameExporter
