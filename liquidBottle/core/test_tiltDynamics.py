# -- Tilt Dynamics Tests -- #

'''
Unit tests for the tilt oscillator, level lag, and jerk/drive terms.

Sean Bowman [10/18/2026]
'''

import pytest

from liquidBottle.core.protocols import SteeringVector
from liquidBottle.core.tiltDynamics import TiltDynamics, TiltState


def _run(tilt: TiltDynamics, steering: SteeringVector, seconds: float,
         dt: float = 0.016, strength: float = 1.0, sensitivity: float = 1.0) -> list:
    responses = []
    for _ in range(int(round(seconds / dt))):
        responses.append(tilt.advance(dt, steering, strength, sensitivity))
    return responses


def testTargetAngleIsClamped():
    tilt = TiltDynamics()
    assert tilt.targetAngle(1.0, 1.0) == pytest.approx(20.0)
    assert tilt.targetAngle(-1.0, 1.0) == pytest.approx(-20.0)
    assert tilt.targetAngle(1.0, 0.6) == pytest.approx(13.6)
    assert tilt.targetAngle(0.0, 1.0) == 0.0


def testStepResponseOvershootsThenSettles():
    tilt = TiltDynamics()
    peak = 0.0
    for _ in range(int(2.0 / 0.016)):
        tilt.advance(0.016, SteeringVector(1.0, 0.0), 1.0, 1.0)
        peak = max(peak, tilt.state.angleDeg)

    assert 20.5 < peak < 25.0

    _run(tilt, SteeringVector(1.0, 0.0), 15.0)
    assert tilt.state.angleDeg == pytest.approx(20.0, abs=1e-3)
    assert tilt.state.angleVelocity == pytest.approx(0.0, abs=1e-3)


def testFirstStepJerkIsClamped():
    tilt = TiltDynamics()
    response = tilt.advance(0.016, SteeringVector(1.0, 0.0), 1.0, 1.0)
    assert response.jerk == pytest.approx(14.0)
    assert abs(response.edgeForcingDrive) <= 1.8
    assert response.edgeForce == pytest.approx(response.edgeForcingDrive * 30.0 * 1.25)


def testJerkUsesDtFloor():
    tilt = TiltDynamics()
    response = tilt.advance(1e-5, SteeringVector(0.01, 0.0), 0.5, 1.0)
    assert response.jerk == pytest.approx(10.0)


def testDriveIsClamped():
    tilt = TiltDynamics(TiltState(angleVelocity=500.0))
    response = tilt.advance(0.016, SteeringVector(1.0, 0.0), 1.0, 1.0)
    assert response.edgeForcingDrive == pytest.approx(1.8)


def testSensitivityScalesAndClampsInput():
    tilt = TiltDynamics()
    tilt.advance(0.016, SteeringVector(0.5, 0.0), 0.5, 2.5)
    assert tilt.state.previousSteeringX == pytest.approx(1.0)

    tilt = TiltDynamics()
    tilt.advance(0.016, SteeringVector(0.5, 0.0), 0.5, 0.5)
    assert tilt.state.previousSteeringX == pytest.approx(0.25)


def testLevelOffsetLagsSteeringY():
    tilt = TiltDynamics()
    tilt.advance(0.016, SteeringVector(0.0, 1.0), 0.5, 1.0)
    assert -6.0 < tilt.state.levelOffset < 0.0

    _run(tilt, SteeringVector(0.0, 1.0), 20.0, strength=0.5)
    assert tilt.state.levelOffset == pytest.approx(-6.0, abs=1e-4)


def testMirroredInputMirrorsState():
    right = TiltDynamics()
    left = TiltDynamics()
    for i in range(120):
        x = 0.7 if i < 60 else -0.2
        a = right.advance(0.016, SteeringVector(x, 0.3), 0.6, 1.4)
        b = left.advance(0.016, SteeringVector(-x, 0.3), 0.6, 1.4)
        assert a.jerk == -b.jerk
        assert a.edgeForce == -b.edgeForce
    assert right.state.angleDeg == -left.state.angleDeg
    assert right.state.angleVelocity == -left.state.angleVelocity
    assert right.state.levelOffset == left.state.levelOffset


def testReturnsToRestWithoutInput():
    tilt = TiltDynamics()
    _run(tilt, SteeringVector(1.0, -1.0), 1.0)
    _run(tilt, SteeringVector(0.0, 0.0), 20.0)
    assert abs(tilt.state.angleDeg) < 1e-6
    assert abs(tilt.state.angleVelocity) < 1e-6
    assert abs(tilt.state.levelOffset) < 1e-6
    assert tilt.state.activity < 1e-6


def testActivityFromAngularVelocity():
    assert TiltState(angleVelocity=10.0).activity == pytest.approx(0.7)
    assert TiltState(angleVelocity=-100.0).activity == pytest.approx(1.0)
    assert TiltState().activity == 0.0
