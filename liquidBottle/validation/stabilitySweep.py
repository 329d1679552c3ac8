# -- Stability Sweep -- #

'''
Randomized stress test of the slosh simulation.

Each run drives a fresh FrameStepper with random steering held for a
random number of frames, random frame times in (0, maxFrameTime], and
random live parameters (strength and sensitivity across their full
range). The largest surface displacement seen during the run must
stay under a fixed bound for the run to pass.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np
from tqdm import tqdm

from liquidBottle.core.frameStepper import FrameStepper
from liquidBottle.core.protocols import LiveParameters, SimulationConfig, SteeringVector


# Largest |height| accepted during a sweep run [px]
defaultHeightBound: float = 25.0

# Per-frame chance of picking a new random steering target
steeringChangeProbability: float = 0.08


class RandomSteering:
    '''
    Piecewise-constant random steering in [-1, 1]^2.

    Parameters:
    -----------
    rng : np.random.Generator
        Generator for the steering targets
    changeProbability : float
        Per-resolve chance of jumping to a new target
    '''

    def __init__(self, rng: np.random.Generator, changeProbability: float = steeringChangeProbability) -> None:
        self._rng = rng
        self._changeProbability = changeProbability
        self._current = SteeringVector(0.0, 0.0)

    def resolve(self) -> SteeringVector:
        if self._rng.random() < self._changeProbability:
            x, y = self._rng.uniform(-1.0, 1.0, 2)
            self._current = SteeringVector(float(x), float(y))
        return self._current


@dataclass
class SweepResult:
    '''
    Outcome of one randomized run.

    Parameters:
    -----------
    runIndex : int
        Run number within the sweep
    nSteps : int
        Frames stepped
    maxHeight : float
        Largest |height| seen [px]
    maxAngleDeg : float
        Largest |tilt| seen [deg]
    maxDroplets : int
        Largest live droplet count seen
    nImpacts : int
        Total droplet impacts
    withinBound : bool
        True when maxHeight stayed under the bound and every value was finite
    '''

    runIndex: int
    nSteps: int
    maxHeight: float
    maxAngleDeg: float
    maxDroplets: int
    nImpacts: int
    withinBound: bool


def _runOne(
    runIndex: int,
    duration: float,
    rng: np.random.Generator,
    bound: float,
    config: SimulationConfig,
) -> SweepResult:
    '''Drive one stepper with random input for duration simulated seconds.'''
    params = LiveParameters(
        strength=float(rng.uniform(0.0, 100.0)),
        fill=float(rng.uniform(10.0, 90.0)),
        sensitivity=float(rng.uniform(0.0, 100.0)),
    )
    runConfig = replace(config, seed=int(rng.integers(0, 2**31 - 1)))
    stepper = FrameStepper(runConfig, params, steering=RandomSteering(rng))

    maxHeight = 0.0
    maxAngle = 0.0
    maxDroplets = 0
    nImpacts = 0
    finite = True
    nSteps = 0

    while stepper.time < duration:
        # (0, maxFrameTime]
        dt = runConfig.maxFrameTime * (1.0 - rng.random())
        snapshot = stepper.step(dt)
        nSteps += 1

        state = snapshot.state
        if not (np.all(np.isfinite(snapshot.heights)) and np.all(np.isfinite(snapshot.velocities))):
            finite = False
            break
        maxHeight = max(maxHeight, state.maxHeight)
        maxAngle = max(maxAngle, abs(state.angleDeg))
        maxDroplets = max(maxDroplets, state.nDroplets)
        nImpacts += state.nImpacts

    return SweepResult(
        runIndex=runIndex,
        nSteps=nSteps,
        maxHeight=maxHeight,
        maxAngleDeg=maxAngle,
        maxDroplets=maxDroplets,
        nImpacts=nImpacts,
        withinBound=finite and maxHeight < bound,
    )


def runStabilitySweep(
    nRuns: int = 20,
    duration: float = 10.0,
    seed: int | None = None,
    bound: float = defaultHeightBound,
    config: SimulationConfig | None = None,
    showProgress: bool = True,
) -> list[SweepResult]:
    '''
    Run nRuns randomized sessions and check the height bound.

    Parameters:
    -----------
    nRuns : int
        Number of independent runs
    duration : float
        Simulated length of each run [s]
    seed : int | None
        Seed for the sweep generator
    bound : float
        Largest |height| accepted [px]
    config : SimulationConfig | None
        Base configuration (container, points, droplets)
    showProgress : bool
        Show a tqdm progress bar

    Returns:
    --------
    list[SweepResult] : One result per run
    '''
    if nRuns < 1:
        raise ValueError(f'nRuns must be >= 1, got {nRuns}')
    if duration <= 0.0:
        raise ValueError(f'duration must be positive, got {duration}')

    config = config or SimulationConfig()
    rng = np.random.default_rng(seed)

    results = []
    for i in tqdm(range(nRuns), desc='Stability sweep', disable=not showProgress):
        results.append(_runOne(i, duration, rng, bound, config))
    return results


def summarizeSweep(results: list[SweepResult]) -> dict:
    '''Aggregate a sweep into pass count and worst-case values.'''
    return {
        'nRuns': len(results),
        'nPassed': sum(1 for r in results if r.withinBound),
        'worstHeight': max((r.maxHeight for r in results), default=0.0),
        'worstAngleDeg': max((r.maxAngleDeg for r in results), default=0.0),
        'peakDroplets': max((r.maxDroplets for r in results), default=0),
        'totalImpacts': sum(r.nImpacts for r in results),
    }
