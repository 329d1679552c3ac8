# -- Stability Sweep Tests -- #

'''
Randomized stability check over jittered frame times and arbitrary
bounded steering.

Sean Bowman [10/18/2026]
'''

import numpy as np
import pytest

from liquidBottle.core.protocols import SimulationConfig
from liquidBottle.validation.stabilitySweep import (
    RandomSteering,
    runStabilitySweep,
    summarizeSweep,
)


def testSweepStaysBounded():
    results = runStabilitySweep(nRuns=4, duration=6.0, seed=123, showProgress=False)
    assert len(results) == 4
    for r in results:
        assert r.withinBound
        assert r.nSteps > 6.0 / 0.033
        assert np.isfinite(r.maxAngleDeg)
        assert r.maxDroplets <= 40


def testSweepIsReproducible():
    a = runStabilitySweep(nRuns=2, duration=2.0, seed=5, showProgress=False)
    b = runStabilitySweep(nRuns=2, duration=2.0, seed=5, showProgress=False)
    assert [r.maxHeight for r in a] == [r.maxHeight for r in b]
    assert [r.nSteps for r in a] == [r.nSteps for r in b]


def testSweepRespectsSmallPool():
    config = SimulationConfig(maxDroplets=3, spawnProbability=1.0)
    results = runStabilitySweep(nRuns=2, duration=3.0, seed=9, config=config, showProgress=False)
    assert all(r.maxDroplets <= 3 for r in results)


def testSummary():
    results = runStabilitySweep(nRuns=3, duration=1.0, seed=1, showProgress=False)
    summary = summarizeSweep(results)
    assert summary['nRuns'] == 3
    assert summary['nPassed'] == 3
    assert summary['worstHeight'] == max(r.maxHeight for r in results)


def testRandomSteeringStaysInUnitSquare():
    steering = RandomSteering(np.random.default_rng(0), changeProbability=1.0)
    for _ in range(500):
        v = steering.resolve()
        assert -1.0 <= v.x <= 1.0
        assert -1.0 <= v.y <= 1.0


@pytest.mark.parametrize('kwargs', [{'nRuns': 0}, {'duration': 0.0}])
def testInvalidSweepArguments(kwargs):
    with pytest.raises(ValueError):
        runStabilitySweep(showProgress=False, **kwargs)


def testSweepUsesConfiguredFieldConstants():
    # Explicit spring step is unstable once tension * dt^2 is large
    unstable = SimulationConfig(tension=1e6, couplingPasses=0, maxDroplets=0)
    results = runStabilitySweep(nRuns=3, duration=2.0, seed=7, config=unstable, showProgress=False)
    assert not any(r.withinBound for r in results)

    summary = summarizeSweep(results)
    assert summary['nPassed'] == 0
