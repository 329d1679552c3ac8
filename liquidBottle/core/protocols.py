# -- Slosh Simulation Protocols -- #

'''
Configuration, live parameters, state snapshots, and collaborator
protocols for the liquid slosh simulation core.

SimulationConfig is fixed when the session starts. LiveParameters
are read on every step so control changes apply on the next frame.
FrameSnapshot is the read-only view handed to rendering and export
after a complete step.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Protocol, TYPE_CHECKING

import numpy as np

from liquidBottle import constants as const
from liquidBottle.utilsLB import clamp

if TYPE_CHECKING:
    from liquidBottle.core.tiltDynamics import TiltState
    from liquidBottle.core.dropletSystem import Droplet, ImpactEvent


######################################################################
# -- Simulation Configuration -- #
######################################################################

@dataclass(frozen=True)
class SimulationConfig:
    '''
    Fixed configuration for one simulation session.

    Parameters:
    -----------
    nPoints : int
        Number of surface samples N (>= 2)
    maxDroplets : int
        Droplet pool capacity
    containerWidth : float
        Container width [px]
    containerHeight : float
        Container height [px]
    tension : float
        Surface restoring constant T [1/s^2]
    baseDamping : float
        Velocity decay rate at zero strength [1/s]
    strengthDampingRelief : float
        Damping removed at full strength [1/s]
    coupling : float
        Neighbour coupling constant C [1/s]
    couplingPasses : int
        Diffusive coupling passes per step
    maxFrameTime : float
        Largest accepted step [s]
    spawnProbability : float
        Chance of a droplet burst once jerk exceeds the threshold
    seed : int | None
        Seed for the session random generator
    '''

    nPoints: int = const.defaultPointCount
    maxDroplets: int = const.defaultMaxDroplets
    containerWidth: float = const.defaultContainerWidth
    containerHeight: float = const.defaultContainerHeight
    tension: float = const.tension
    baseDamping: float = const.baseDamping
    strengthDampingRelief: float = const.strengthDampingRelief
    coupling: float = const.coupling
    couplingPasses: int = const.couplingPasses
    maxFrameTime: float = const.maxFrameTime
    spawnProbability: float = const.spawnProbability
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.nPoints < 2:
            raise ValueError(f'nPoints must be >= 2, got {self.nPoints}')
        if self.maxDroplets < 0:
            raise ValueError(f'maxDroplets must be >= 0, got {self.maxDroplets}')
        if self.containerWidth <= 0.0 or self.containerHeight <= 0.0:
            raise ValueError(
                f'Container size must be positive, got '
                f'{self.containerWidth} x {self.containerHeight}'
            )
        if self.couplingPasses < 0:
            raise ValueError(f'couplingPasses must be >= 0, got {self.couplingPasses}')
        if self.maxFrameTime <= 0.0:
            raise ValueError(f'maxFrameTime must be positive, got {self.maxFrameTime}')
        object.__setattr__(self, 'spawnProbability', clamp(self.spawnProbability, 0.0, 1.0))

    @classmethod
    def phone(cls) -> SimulationConfig:
        '''Tall narrow bottle sized for a phone screen.'''
        return cls(containerWidth=260.0, containerHeight=480.0)

    @classmethod
    def desktop(cls) -> SimulationConfig:
        '''Wider bottle for a desktop window.'''
        return cls(containerWidth=420.0, containerHeight=620.0)

    @classmethod
    def fromJson(cls, configPath: str) -> SimulationConfig:
        '''
        Load configuration from a JSON file.

        Reads the 'container', 'surface', 'droplets', and 'session'
        sections; missing keys fall back to the defaults.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        SimulationConfig : Loaded configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        return cls.fromDict(data)

    @classmethod
    def fromDict(cls, data: dict) -> SimulationConfig:
        '''Build a configuration from the parsed JSON sections.'''
        containerSection = data.get('container', {})
        surfaceSection = data.get('surface', {})
        dropletSection = data.get('droplets', {})
        sessionSection = data.get('session', {})

        return cls(
            nPoints=surfaceSection.get('nPoints', const.defaultPointCount),
            maxDroplets=dropletSection.get('maxDroplets', const.defaultMaxDroplets),
            containerWidth=containerSection.get('width', const.defaultContainerWidth),
            containerHeight=containerSection.get('height', const.defaultContainerHeight),
            tension=surfaceSection.get('tension', const.tension),
            baseDamping=surfaceSection.get('baseDamping', const.baseDamping),
            strengthDampingRelief=surfaceSection.get(
                'strengthDampingRelief', const.strengthDampingRelief,
            ),
            coupling=surfaceSection.get('coupling', const.coupling),
            couplingPasses=surfaceSection.get('couplingPasses', const.couplingPasses),
            maxFrameTime=sessionSection.get('maxFrameTime', const.maxFrameTime),
            spawnProbability=dropletSection.get('spawnProbability', const.spawnProbability),
            seed=sessionSection.get('seed', None),
        )

    def toDict(self) -> dict:
        '''Plain-dict form used by the frame exporter.'''
        return {
            'nPoints': self.nPoints,
            'maxDroplets': self.maxDroplets,
            'containerWidth': self.containerWidth,
            'containerHeight': self.containerHeight,
            'tension': self.tension,
            'baseDamping': self.baseDamping,
            'strengthDampingRelief': self.strengthDampingRelief,
            'coupling': self.coupling,
            'couplingPasses': self.couplingPasses,
            'maxFrameTime': self.maxFrameTime,
            'spawnProbability': self.spawnProbability,
            'seed': self.seed,
        }


######################################################################
# -- Live Parameters -- #
######################################################################

@dataclass
class LiveParameters:
    '''
    User controls read on every step.

    Slider values are on a 0-100 scale and clamped on read, so
    out-of-range input degrades to the nearest valid setting.

    Parameters:
    -----------
    strength : float
        Slosh strength (0-100)
    fill : float
        Fill level as a percentage of container height (0-100)
    sensitivity : float
        Input sensitivity (0-100), mapped to a 0.5-2.5 gain
    liquidColor : str
        Liquid hex color (rendering only)
    '''

    strength: float = 60.0
    fill: float = 55.0
    sensitivity: float = 25.0
    liquidColor: str = '#2f8cff'

    @property
    def strengthFactor(self) -> float:
        '''Strength in [0, 1].'''
        return clamp(self.strength, 0.0, 100.0) / 100.0

    @property
    def fillFactor(self) -> float:
        '''Fill fraction in [0, 1].'''
        return clamp(self.fill, 0.0, 100.0) / 100.0

    @property
    def sensitivityGain(self) -> float:
        '''Input gain in [0.5, 2.5].'''
        return 0.5 + 2.0 * clamp(self.sensitivity, 0.0, 100.0) / 100.0

    @property
    def amplitudeGain(self) -> float:
        '''Displacement gain applied when sampling the surface.'''
        return const.amplitudeBase + clamp(self.strength, 0.0, 100.0) / const.amplitudeDivisor

    def toDict(self) -> dict:
        return {
            'strength': self.strength,
            'fill': self.fill,
            'sensitivity': self.sensitivity,
            'liquidColor': self.liquidColor,
        }


######################################################################
# -- Steering Input -- #
######################################################################

@dataclass(frozen=True)
class SteeringVector:
    '''Normalized directional input, components in [-1, 1].'''

    x: float = 0.0
    y: float = 0.0

    def clamped(self) -> SteeringVector:
        '''Copy with both components clamped to [-1, 1].'''
        return SteeringVector(clamp(self.x, -1.0, 1.0), clamp(self.y, -1.0, 1.0))


class SteeringSource(Protocol):
    '''Anything that yields one steering vector per frame.'''

    def resolve(self) -> SteeringVector:
        '''Steering vector for the frame about to be stepped.'''
        ...


class AudioSink(Protocol):
    '''Receives one call per droplet impact.'''

    def playImpact(self, power: float) -> None:
        ...


######################################################################
# -- Simulation State -- #
######################################################################

@dataclass
class SimulationState:
    '''
    Scalar diagnostics for one completed step.

    Parameters:
    -----------
    time : float
        Simulation time after the step [s]
    step : int
        Step number
    dt : float
        Step size actually used [s]
    kineticEnergy : float
        0.5 * sum(v^2) over the surface samples
    potentialEnergy : float
        Spring + coupling energy of the surface samples
    maxHeight : float
        Largest |height| over the surface samples
    angleDeg : float
        Container tilt [deg]
    levelOffset : float
        Fill-line offset [px]
    nDroplets : int
        Live droplets after the step
    nImpacts : int
        Impacts resolved during the step
    nSpawned : int
        Droplets admitted during the step
    '''

    time: float
    step: int
    dt: float
    kineticEnergy: float
    potentialEnergy: float
    maxHeight: float
    angleDeg: float
    levelOffset: float
    nDroplets: int
    nImpacts: int
    nSpawned: int

    @property
    def totalEnergy(self) -> float:
        '''Kinetic + potential surface energy.'''
        return self.kineticEnergy + self.potentialEnergy


######################################################################
# -- Frame Snapshot -- #
######################################################################

@dataclass(frozen=True)
class FrameSnapshot:
    '''
    Read-only copy of the simulation after a complete step.

    Arrays are copies; mutating them does not affect the simulation.
    '''

    state: SimulationState
    heights: np.ndarray
    velocities: np.ndarray
    tilt: TiltState
    surfaceY: np.ndarray
    activity: float
    droplets: tuple[Droplet, ...]
    impacts: tuple[ImpactEvent, ...]
    params: dict = field(default_factory=dict)
    containerWidth: float = const.defaultContainerWidth
    containerHeight: float = const.defaultContainerHeight

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def nPoints(self) -> int:
        return len(self.heights)

    @property
    def sampleX(self) -> np.ndarray:
        '''Screen x of each surface sample [px].'''
        return np.linspace(0.0, self.containerWidth, self.nPoints)
