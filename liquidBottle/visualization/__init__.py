# -- Visualization Package -- #

'''
Rendering collaborator: screen-space geometry for the liquid surface
and droplets, plus Plotly figures for frames and session history.

Sean Bowman [10/18/2026]
'''

from liquidBottle.visualization.geometry import (
    DropletShape,
    LiquidGradient,
    buildDropletShapes,
    buildLiquidPolygon,
    buildSurfaceCurve,
    liquidGradient,
)
from liquidBottle.visualization.plots import plotFrame, plotHistory
