# -- Surface Field Tests -- #

'''
Unit tests for the damped spring surface field.

Sean Bowman [10/18/2026]
'''

import numpy as np
import pytest

from liquidBottle.core.surfaceField import SurfaceField, crestShape


def _field(nPoints: int = 64, seed: int = 0) -> SurfaceField:
    return SurfaceField(nPoints=nPoints, rng=np.random.default_rng(seed))


def testRejectsFewerThanTwoPoints():
    with pytest.raises(ValueError):
        SurfaceField(nPoints=1)


def testFlatFieldStaysFlatWithoutForcing():
    field = _field()
    for _ in range(200):
        field.advance(0.016, 0.0, strength=0.6)
    assert np.all(field.heights == 0.0)
    assert np.all(field.velocities == 0.0)


def testEdgeForcingIsAntiSymmetric():
    '''Positive forcing raises index 0 and lowers index N-1 by the same amount.'''
    field = _field()
    for _ in range(10):
        field.advance(0.016, 25.0, strength=0.5)

    assert field.heights[0] > 0.0
    assert field.heights[-1] < 0.0
    np.testing.assert_allclose(field.heights, -field.heights[::-1], atol=1e-12)
    np.testing.assert_allclose(field.velocities, -field.velocities[::-1], atol=1e-12)


def testNegatedForcingNegatesTrajectory():
    a = _field()
    b = _field()
    for i in range(150):
        force = 40.0 * np.sin(i * 0.2)
        a.advance(0.016, force, strength=0.8)
        b.advance(0.016, -force, strength=0.8)
    np.testing.assert_array_equal(a.heights, -b.heights)
    np.testing.assert_array_equal(a.velocities, -b.velocities)


def testFreeOscillationDecaysToRest():
    field = _field()
    field.heights[:] = np.linspace(-3.0, 3.0, field.nPoints)
    for _ in range(int(20.0 / 0.016)):
        field.advance(0.016, 0.0, strength=1.0)
    assert np.max(np.abs(field.heights)) < 1e-6
    assert np.max(np.abs(field.velocities)) < 1e-6


def testDampingFallsWithStrength():
    field = _field()
    assert field.damping(0.0) == pytest.approx(5.1)
    assert field.damping(1.0) == pytest.approx(3.9)
    assert field.damping(5.0) == pytest.approx(3.9)


def testHeightAtInterpolatesLinearly():
    field = _field(nPoints=5)
    field.heights[:] = [0.0, 1.0, 2.0, 3.0, 4.0]

    assert field.heightAt(0.0) == pytest.approx(0.0)
    assert field.heightAt(0.375) == pytest.approx(1.5)
    assert field.heightAt(1.0) == pytest.approx(4.0)
    assert field.heightAt(0.375, gain=2.0) == pytest.approx(3.0)


def testHeightAtClampsPosition():
    field = _field(nPoints=5)
    field.heights[:] = [0.0, 1.0, 2.0, 3.0, 4.0]
    assert field.heightAt(-0.5) == pytest.approx(0.0)
    assert field.heightAt(1.7) == pytest.approx(4.0)


def testHeightAtDoesNotMutate():
    field = _field()
    field.advance(0.016, 30.0)
    heights = field.heights.copy()
    velocities = field.velocities.copy()
    for f in np.linspace(0.0, 1.0, 17):
        field.heightAt(f, activity=0.7, gain=1.3)
    np.testing.assert_array_equal(field.heights, heights)
    np.testing.assert_array_equal(field.velocities, velocities)


def testCrestShapeIdentityAtRest():
    assert crestShape(2.5, 0.0) == 2.5
    assert crestShape(-0.4, 0.0) == -0.4
    assert crestShape(0.0, 1.0) == 0.0


def testCrestShapeAtFullActivity():
    assert crestShape(2.0, 1.0) == pytest.approx(2.0 ** 0.85)
    assert crestShape(-2.0, 1.0) == pytest.approx(-(2.0 ** 0.85))
    assert crestShape(2.0, 0.5) == pytest.approx(2.0 + (2.0 ** 0.85 - 2.0) * 0.5)


def testNonPositiveImpulseIsNoOp():
    field = _field()
    field.injectImpulse(0.5, 0.0)
    field.injectImpulse(0.5, -2.0)
    assert np.all(field.velocities == 0.0)


def testImpulseSpansFiveSamplesWithFalloff():
    field = _field()
    field.injectImpulse(0.5, 1.0)

    # 0.5 * 63 = 31.5 rounds half up to 32
    nonzero = np.nonzero(field.velocities)[0]
    np.testing.assert_array_equal(nonzero, [30, 31, 32, 33, 34])
    np.testing.assert_allclose(
        np.abs(field.velocities[30:35]),
        [1.0 / 3.0, 2.0 / 3.0, 1.0, 2.0 / 3.0, 1.0 / 3.0],
    )
    assert np.all(field.heights == 0.0)


def testImpulsePowerIsClamped():
    strong = _field()
    strong.injectImpulse(0.5, 10.0)
    assert np.max(np.abs(strong.velocities)) == pytest.approx(4.0)

    weak = _field()
    weak.injectImpulse(0.5, 0.1)
    assert np.max(np.abs(weak.velocities)) == pytest.approx(0.6)


def testImpulseAtWallIsTruncated():
    field = _field()
    field.injectImpulse(0.0, 1.0)
    nonzero = np.nonzero(field.velocities)[0]
    np.testing.assert_array_equal(nonzero, [0, 1, 2])
    np.testing.assert_allclose(np.abs(field.velocities[:3]), [1.0, 2.0 / 3.0, 1.0 / 3.0])


def testEnergyDiagnostics():
    field = SurfaceField(nPoints=4, tension=95.0, coupling=20.0)
    field.heights[:] = 1.0
    field.velocities[:] = [1.0, 1.0, 0.0, 0.0]
    assert field.potentialEnergy() == pytest.approx(0.5 * 95.0 * 4.0)
    assert field.kineticEnergy() == pytest.approx(1.0)

    field.heights[:] = [0.0, 1.0, 0.0, 0.0]
    assert field.potentialEnergy() == pytest.approx(0.5 * 95.0 + 0.5 * 20.0 * 2.0)
    assert field.maxHeight() == pytest.approx(1.0)


def testResetReturnsToRest():
    field = _field()
    field.advance(0.016, 50.0)
    field.injectImpulse(0.3, 2.0)
    field.reset()
    assert np.all(field.heights == 0.0)
    assert np.all(field.velocities == 0.0)
