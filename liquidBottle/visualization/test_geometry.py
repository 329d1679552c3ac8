# -- Render Geometry Tests -- #

'''
Tests for the surface curve, droplet ellipses, liquid gradient, and
the Plotly figure builders.

Sean Bowman [10/18/2026]
'''

import math

import numpy as np
import plotly.graph_objects as go
import pytest

from liquidBottle.core.dropletSystem import Droplet
from liquidBottle.core.frameStepper import FrameStepper
from liquidBottle.core.protocols import SimulationConfig
from liquidBottle.scenarios.steeringScripts import ConstantSteering
from liquidBottle.visualization.geometry import (
    buildDropletShapes,
    buildLiquidPolygon,
    buildSurfaceCurve,
    liquidGradient,
)
from liquidBottle.visualization.plots import plotFrame, plotHistory


def _movingStepper() -> FrameStepper:
    stepper = FrameStepper(SimulationConfig(seed=4), steering=ConstantSteering(1.0, 0.0))
    for _ in range(10):
        stepper.step(0.016)
    return stepper


def testSurfaceCurveAtRestMatchesPhysicalSurface():
    snapshot = FrameStepper(SimulationConfig(seed=1)).snapshot
    x, y = buildSurfaceCurve(snapshot, timeS=1.3)
    assert len(x) == snapshot.nPoints
    assert x[0] == 0.0
    assert x[-1] == pytest.approx(snapshot.containerWidth)
    np.testing.assert_array_equal(y, snapshot.surfaceY)


def testRippleIsBoundedByActivity():
    snapshot = _movingStepper().snapshot
    assert snapshot.activity > 0.0
    _, y = buildSurfaceCurve(snapshot, timeS=0.25)
    _, flat = buildSurfaceCurve(snapshot, ripple=False)
    assert np.max(np.abs(y - flat)) <= 1.4 * snapshot.activity + 1e-12
    assert np.max(np.abs(y - flat)) > 0.0


def testLiquidPolygonIsClosedAtFloor():
    snapshot = FrameStepper(SimulationConfig(seed=1)).snapshot
    x, y = buildLiquidPolygon(snapshot)
    assert (x[0], y[0]) == (0.0, snapshot.containerHeight)
    assert (x[-1], y[-1]) == (0.0, snapshot.containerHeight)
    assert len(x) == snapshot.nPoints + 3


def testDropletShapesStretchWithSpeed():
    slow = Droplet(x=0.0, y=0.0, vx=0.0, vy=0.0, radius=2.0)
    fast = Droplet(x=0.0, y=0.0, vx=0.0, vy=1800.0, radius=2.0)
    mid = Droplet(x=0.0, y=0.0, vx=-450.0, vy=0.0, radius=2.0)
    a, b, c = buildDropletShapes([slow, fast, mid])

    assert (a.length, a.width) == (2.0, 2.0)
    assert b.length == pytest.approx(2.0 * 3.2)
    assert b.width == pytest.approx(2.0 * 0.75)
    assert b.angle == pytest.approx(math.pi / 2.0)
    assert c.length == pytest.approx(2.0 * (1.0 + 2.2 * 0.5))
    assert c.angle == pytest.approx(math.pi)


def testDropletOutlineCentredOnDroplet():
    shape = buildDropletShapes([Droplet(x=50.0, y=80.0, vx=300.0, vy=300.0, radius=3.0)])[0]
    ox, oy = shape.outline(32)
    assert np.mean(ox[:-1]) == pytest.approx(50.0)
    assert np.mean(oy[:-1]) == pytest.approx(80.0)


def testLiquidGradientStops():
    gradient = liquidGradient('#2f8cff')
    # 0x2f = 47, 0x8c = 140, 0xff = 255
    assert gradient.top == 'rgba(117,230,255,0.84)'
    assert gradient.middle == 'rgba(67,180,255,0.92)'
    assert gradient.bottom == 'rgba(17,110,245,0.96)'
    assert [s[0] for s in gradient.stops] == [0.0, 0.55, 1.0]


def testLiquidGradientClampsChannels():
    gradient = liquidGradient('#000000')
    assert gradient.bottom == 'rgba(0,0,0,0.96)'


def testLiquidGradientRejectsBadColor():
    with pytest.raises(ValueError):
        liquidGradient('#abc')


def testPlotFrameAndHistory():
    stepper = _movingStepper()
    states = []
    for _ in range(20):
        states.append(stepper.step(0.016).state)

    frame = plotFrame(stepper.snapshot)
    history = plotHistory(states)
    assert isinstance(frame, go.Figure)
    assert isinstance(history, go.Figure)
    assert len(history.data) == 8
    assert list(history.data[0].x) == pytest.approx([s.time for s in states])
