# -- Manim Animation Theme -- #

'''
Color theme for the bottle animation.

Mirrors the Plotly theme in liquidBottle.visualization.theme.

Sean Bowman [10/18/2026]
'''

from manim import ManimColor

BLUE = ManimColor('#42A5F5')
CYAN = ManimColor('#26C6DA')
WHITE = ManimColor('#E0E0E0')

CONTAINER_COLOR = WHITE
SURFACE_COLOR = ManimColor('#BBDEFB')
DROPLET_COLOR = ManimColor('#D2F0FF')
BG_COLOR = ManimColor('#1a1a2e')
