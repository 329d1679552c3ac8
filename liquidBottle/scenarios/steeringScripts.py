# -- Scripted Steering Scenarios -- #

'''
Pre-configured steering inputs for headless sessions.

A script maps simulation time to a steering vector, standing in for
a user dragging, tilting, or shaking the bottle. Scripts satisfy the
SteeringSource protocol; the runner calls advance(dt) after each
step so the next resolve() reads the following frame's input.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from liquidBottle.core.protocols import SteeringVector


######################################################################
# -- Steering Sources -- #
######################################################################

class ConstantSteering:
    '''Holds one steering vector forever.'''

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.vector = SteeringVector(x, y).clamped()

    def resolve(self) -> SteeringVector:
        return self.vector

    def advance(self, dt: float) -> None:
        pass


class ScriptedSteering:
    '''
    Steering from a function of simulation time.

    Parameters:
    -----------
    name : str
        Scenario name (used in exports)
    profile : Callable[[float], tuple[float, float]]
        Maps time [s] to (x, y); output is clamped to [-1, 1]
    '''

    def __init__(self, name: str, profile: Callable[[float], tuple[float, float]]) -> None:
        self.name = name
        self._profile = profile
        self._time: float = 0.0

    @property
    def time(self) -> float:
        return self._time

    def resolve(self) -> SteeringVector:
        x, y = self._profile(self._time)
        return SteeringVector(x, y).clamped()

    def advance(self, dt: float) -> None:
        self._time += dt


######################################################################
# -- Scenario Presets -- #
######################################################################

@dataclass
class SteeringScenario:
    '''
    Named steering script with its default session length.

    Parameters:
    -----------
    name : str
        Preset key
    description : str
        One-line summary for the runner banner
    duration : float
        Default session length [s]
    '''

    name: str
    description: str
    duration: float

    def build(self) -> ScriptedSteering:
        '''Create a fresh steering source for this scenario.'''
        return ScriptedSteering(self.name, _PROFILES[self.name])


def _idle(t: float) -> tuple[float, float]:
    return (0.0, 0.0)


def _tiltRight(t: float) -> tuple[float, float]:
    # Snap right, hold, release at 3 s
    return (1.0, 0.0) if t < 3.0 else (0.0, 0.0)


def _shake(t: float) -> tuple[float, float]:
    # Square-wave shake at 2.5 Hz for 4 s
    if t >= 4.0:
        return (0.0, 0.0)
    return (1.0 if math.sin(2.0 * math.pi * 2.5 * t) >= 0.0 else -1.0, 0.0)


def _swirl(t: float) -> tuple[float, float]:
    # Circular drag, one revolution per 1.6 s
    phase = 2.0 * math.pi * t / 1.6
    return (0.8 * math.cos(phase), 0.8 * math.sin(phase))


def _tiltDown(t: float) -> tuple[float, float]:
    # Tip the bottle toward the viewer, then back
    return (0.0, 1.0) if t < 2.5 else (0.0, -0.5)


_PROFILES: dict[str, Callable[[float], tuple[float, float]]] = {
    'idle': _idle,
    'tiltRight': _tiltRight,
    'shake': _shake,
    'swirl': _swirl,
    'tiltDown': _tiltDown,
}

SCENARIOS: dict[str, SteeringScenario] = {
    'idle': SteeringScenario('idle', 'No input; the surface stays at rest', 3.0),
    'tiltRight': SteeringScenario('tiltRight', 'Snap right, hold, then release', 6.0),
    'shake': SteeringScenario('shake', 'Hard left/right shake, then settle', 7.0),
    'swirl': SteeringScenario('swirl', 'Circular drag around the bottle', 6.0),
    'tiltDown': SteeringScenario('tiltDown', 'Tip toward the viewer and back', 5.0),
}


def createScenario(name: str) -> tuple[SteeringScenario, ScriptedSteering]:
    '''
    Look up a scenario preset and build its steering source.

    Parameters:
    -----------
    name : str
        Key from SCENARIOS

    Returns:
    --------
    tuple[SteeringScenario, ScriptedSteering] : Preset and a fresh source
    '''
    if name not in SCENARIOS:
        raise ValueError(
            f'Unknown scenario "{name}". Available: {", ".join(SCENARIOS)}'
        )
    scenario = SCENARIOS[name]
    return scenario, scenario.build()
