# -- Frame and History Plots -- #

'''
Plotly figures for a single bottle frame and for a whole session.

plotFrame draws the container, the liquid body with its gradient
color, the surface curve, and the droplet ellipses in screen space
(y axis reversed so it grows downward like the canvas).

plotHistory is a 4-panel dashboard of the per-step diagnostics.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

from typing import Sequence

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from liquidBottle.core.protocols import FrameSnapshot, SimulationState
from liquidBottle.visualization import theme
from liquidBottle.visualization.geometry import (
    buildDropletShapes,
    buildLiquidPolygon,
    buildSurfaceCurve,
    liquidGradient,
)


def plotFrame(snapshot: FrameSnapshot, title: str | None = None) -> go.Figure:
    '''
    Draw one completed frame of the bottle.

    Parameters:
    -----------
    snapshot : FrameSnapshot
        Completed frame
    title : str | None
        Figure title (defaults to the frame time)

    Returns:
    --------
    go.Figure : Screen-space view of the bottle
    '''
    w = snapshot.containerWidth
    h = snapshot.containerHeight
    color = snapshot.params.get('liquidColor', '#2f8cff')
    gradient = liquidGradient(color)

    fig = go.Figure()

    # Liquid body
    bodyX, bodyY = buildLiquidPolygon(snapshot)
    fig.add_trace(go.Scatter(
        x=bodyX, y=bodyY, mode='lines', fill='toself',
        fillcolor=gradient.middle,
        line=dict(color=gradient.bottom, width=0),
        name='Liquid', hoverinfo='skip',
    ))

    # Surface highlight
    sx, sy = buildSurfaceCurve(snapshot)
    fig.add_trace(go.Scatter(
        x=sx, y=sy, mode='lines',
        line=dict(color=gradient.top, width=3),
        name='Surface',
    ))
    fig.add_trace(go.Scatter(
        x=sx, y=sy - 1.0, mode='lines',
        line=dict(color=theme.SURFACE_HIGHLIGHT, width=1),
        showlegend=False, hoverinfo='skip',
    ))

    # Droplets
    for i, shape in enumerate(buildDropletShapes(snapshot.droplets)):
        ox, oy = shape.outline()
        fig.add_trace(go.Scatter(
            x=ox, y=oy, mode='lines', fill='toself',
            fillcolor=theme.DROPLET_FILL,
            line=dict(color=theme.DROPLET_HIGHLIGHT, width=1),
            name='Droplets', legendgroup='droplets', showlegend=(i == 0),
        ))

    # Container walls (open top)
    fig.add_trace(go.Scatter(
        x=[0.0, 0.0, w, w], y=[0.0, h, h, 0.0], mode='lines',
        line=dict(color=theme.CONTAINER_COLOR, width=3),
        name='Container', hoverinfo='skip',
    ))

    fig.update_layout(
        title=title or f'Liquid Bottle -- t = {snapshot.time:.3f} s',
        template=theme.TEMPLATE,
        width=max(360, int(w) + 160),
        height=max(480, int(h) + 120),
        showlegend=True,
    )
    fig.update_xaxes(range=[-20.0, w + 20.0], title_text='x (px)')
    fig.update_yaxes(
        range=[h + 20.0, -20.0], title_text='y (px)',
        scaleanchor='x', scaleratio=1.0,
    )
    return fig


def plotHistory(states: Sequence[SimulationState], title: str = 'Slosh Session') -> go.Figure:
    '''
    Create a 4-panel session dashboard.

    Layout:
        Row 1: Tilt Angle        |  Surface Energy
        Row 2: Max Displacement  |  Droplets / Impacts

    Parameters:
    -----------
    states : Sequence[SimulationState]
        Per-step diagnostics in time order
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure with 4 subplots
    '''
    times = np.array([s.time for s in states])

    fig = make_subplots(
        rows=2, cols=2,
        subplot_titles=(
            'Tilt Angle', 'Surface Energy',
            'Max Displacement', 'Droplets',
        ),
        vertical_spacing=0.12,
        horizontal_spacing=0.08,
    )

    ######################################################################
    # Row 1, Col 1: Tilt Angle
    ######################################################################
    fig.add_trace(go.Scatter(x=times, y=[s.angleDeg for s in states], mode='lines',
                             name='Angle', line=dict(color=theme.BLUE, width=2)),
                  row=1, col=1)
    fig.add_trace(go.Scatter(x=times, y=[s.levelOffset for s in states], mode='lines',
                             name='Level Offset', line=dict(color=theme.ORANGE, width=1, dash='dash')),
                  row=1, col=1)
    fig.update_xaxes(title_text='t (s)', row=1, col=1)
    fig.update_yaxes(title_text='deg / px', row=1, col=1)

    ######################################################################
    # Row 1, Col 2: Surface Energy
    ######################################################################
    fig.add_trace(go.Scatter(x=times, y=[s.kineticEnergy for s in states], mode='lines',
                             name='Kinetic', line=dict(color=theme.RED)),
                  row=1, col=2)
    fig.add_trace(go.Scatter(x=times, y=[s.potentialEnergy for s in states], mode='lines',
                             name='Potential', line=dict(color=theme.GREEN)),
                  row=1, col=2)
    fig.add_trace(go.Scatter(x=times, y=[s.totalEnergy for s in states], mode='lines',
                             name='Total', line=dict(color=theme.WHITE, width=2)),
                  row=1, col=2)
    fig.update_xaxes(title_text='t (s)', row=1, col=2)
    fig.update_yaxes(title_text='energy (arb.)', row=1, col=2)

    ######################################################################
    # Row 2, Col 1: Max Displacement
    ######################################################################
    fig.add_trace(go.Scatter(x=times, y=[s.maxHeight for s in states], mode='lines',
                             name='max |h|', line=dict(color=theme.CYAN, width=2)),
                  row=2, col=1)
    fig.update_xaxes(title_text='t (s)', row=2, col=1)
    fig.update_yaxes(title_text='px', row=2, col=1)

    ######################################################################
    # Row 2, Col 2: Droplets
    ######################################################################
    fig.add_trace(go.Scatter(x=times, y=[s.nDroplets for s in states], mode='lines',
                             name='Live', line=dict(color=theme.PURPLE, width=2)),
                  row=2, col=2)
    fig.add_trace(go.Bar(x=times, y=[s.nImpacts for s in states],
                         name='Impacts', marker_color=theme.REFERENCE_LINE),
                  row=2, col=2)
    fig.update_xaxes(title_text='t (s)', row=2, col=2)
    fig.update_yaxes(title_text='count', row=2, col=2)

    fig.update_layout(
        title=title,
        template=theme.TEMPLATE,
        height=700,
        showlegend=True,
    )
    return fig
