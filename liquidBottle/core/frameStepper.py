# -- Frame Stepper -- #

'''
Advances the whole slosh simulation by one frame.

Owns the surface field, tilt dynamics, droplet pool, and the
session random generator. Sub-steps run in dependency order:

    1. Resolve the steering vector (idle decay is the source's job)
    2. Advance tilt/level dynamics -> edge drive + jerk
    3. Advance the surface field with the edge force
    4. Evaluate the droplet spawn trigger from jerk
    5. Advance droplets; route impacts into the field and the audio sink

Nothing is exposed to rendering until all five sub-steps finish:
step() returns a FrameSnapshot built afterwards.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math

import numpy as np

from liquidBottle import constants as const
from liquidBottle.core.protocols import (
    AudioSink,
    FrameSnapshot,
    LiveParameters,
    SimulationConfig,
    SimulationState,
    SteeringSource,
    SteeringVector,
)
from liquidBottle.core.surfaceField import SurfaceField
from liquidBottle.core.tiltDynamics import TiltDynamics, TiltResponse
from liquidBottle.core.dropletSystem import DropletSystem, ImpactEvent, burstSize


class _CenteredSteering:
    '''Steering source that always reports (0, 0).'''

    def resolve(self) -> SteeringVector:
        return SteeringVector(0.0, 0.0)


class FrameStepper:
    '''
    Explicitly owned simulation state plus the per-frame step.

    Parameters:
    -----------
    config : SimulationConfig | None
        Fixed session configuration
    params : LiveParameters | None
        Live controls, read on every step
    steering : SteeringSource | None
        Per-frame steering input (defaults to centered)
    audio : AudioSink | None
        Receives playImpact(power) for every droplet impact
    '''

    def __init__(
        self,
        config: SimulationConfig | None = None,
        params: LiveParameters | None = None,
        steering: SteeringSource | None = None,
        audio: AudioSink | None = None,
    ) -> None:
        self._config = config or SimulationConfig()
        self.params = params or LiveParameters()
        self.steering: SteeringSource = steering or _CenteredSteering()
        self.audio = audio

        self._rng = np.random.default_rng(self._config.seed)
        self._field = SurfaceField(
            nPoints=self._config.nPoints,
            tension=self._config.tension,
            baseDamping=self._config.baseDamping,
            strengthDampingRelief=self._config.strengthDampingRelief,
            coupling=self._config.coupling,
            couplingPasses=self._config.couplingPasses,
            rng=self._rng,
        )
        self._tilt = TiltDynamics()
        self._droplets = DropletSystem(maxDroplets=self._config.maxDroplets, rng=self._rng)

        self._time: float = 0.0
        self._step: int = 0
        self._lastResponse = TiltResponse(edgeForcingDrive=0.0, jerk=0.0, edgeForce=0.0)
        self._snapshot = self._buildSnapshot(0.0, [], 0)

    ######################################################################
    # -- Main Step -- #
    ######################################################################

    def step(self, dt: float) -> FrameSnapshot:
        '''
        Advance every component by one frame.

        dt is clamped to maxFrameTime. A non-positive or non-finite
        dt advances nothing and returns the previous snapshot.

        Parameters:
        -----------
        dt : float
            Elapsed frame time [s]

        Returns:
        --------
        FrameSnapshot : Read-only view of the completed frame
        '''
        if not math.isfinite(dt) or dt <= 0.0:
            return self._snapshot
        dt = min(dt, self._config.maxFrameTime)

        params = self.params
        strength = params.strengthFactor

        # 1. Steering input
        steering = self.steering.resolve()

        # 2. Tilt / level
        response = self._tilt.advance(dt, steering, strength, params.sensitivityGain)
        self._lastResponse = response

        # 3. Surface field
        self._field.advance(dt, response.edgeForce, strength)

        # 4. Spawn trigger
        nSpawned = 0
        if abs(response.jerk) > const.jerkThreshold and self._rng.random() < self._config.spawnProbability:
            side = 'right' if response.jerk > 0.0 else 'left'
            nSpawned = self._droplets.spawn(
                burstSize(response.jerk),
                side,
                self.baseY,
                self._config.containerWidth,
                strength,
            )

        # 5. Droplets and impact routing
        impacts = self._droplets.advance(
            dt,
            self._config.containerWidth,
            self._config.containerHeight,
            self.surfaceY,
        )
        for impact in impacts:
            self._field.injectImpulse(impact.horizontalFraction, impact.power)
            if self.audio is not None:
                self.audio.playImpact(impact.power)

        self._time += dt
        self._step += 1
        self._snapshot = self._buildSnapshot(dt, impacts, nSpawned)
        return self._snapshot

    ######################################################################
    # -- Surface Composition -- #
    ######################################################################

    @property
    def baseY(self) -> float:
        '''Resting fill line [px] including the level offset.'''
        h = self._config.containerHeight
        return h * (1.0 - self.params.fillFactor) + self._tilt.state.levelOffset

    def slopeY(self, fraction: float) -> float:
        '''Vertical offset of the tilted resting surface at a fraction [px].'''
        slope = math.tan(math.radians(self._tilt.state.angleDeg))
        return (fraction - 0.5) * self._config.containerWidth * slope * const.slopeGain

    def surfaceY(self, fraction: float) -> float:
        '''
        Screen y of the liquid surface at a horizontal fraction.

        The one surface query used by droplet collision and by
        the rendering snapshot.
        '''
        displacement = self._field.heightAt(
            fraction,
            self._tilt.state.activity,
            self.params.amplitudeGain,
        )
        return self.baseY + self.slopeY(fraction) + displacement

    ######################################################################
    # -- Snapshots -- #
    ######################################################################

    def _buildSnapshot(
        self,
        dt: float,
        impacts: list[ImpactEvent],
        nSpawned: int,
    ) -> FrameSnapshot:
        '''Copy the completed frame into an immutable snapshot.'''
        fractions = np.linspace(0.0, 1.0, self._config.nPoints)
        surface = np.array([self.surfaceY(f) for f in fractions])

        state = SimulationState(
            time=self._time,
            step=self._step,
            dt=dt,
            kineticEnergy=self._field.kineticEnergy(),
            potentialEnergy=self._field.potentialEnergy(),
            maxHeight=self._field.maxHeight(),
            angleDeg=self._tilt.state.angleDeg,
            levelOffset=self._tilt.state.levelOffset,
            nDroplets=self._droplets.count,
            nImpacts=len(impacts),
            nSpawned=nSpawned,
        )

        return FrameSnapshot(
            state=state,
            heights=self._field.heights.copy(),
            velocities=self._field.velocities.copy(),
            tilt=self._tilt.state.copy(),
            surfaceY=surface,
            activity=self._tilt.state.activity,
            droplets=tuple(d.copy() for d in self._droplets.droplets),
            impacts=tuple(impacts),
            params=self.params.toDict(),
            containerWidth=self._config.containerWidth,
            containerHeight=self._config.containerHeight,
        )

    def reset(self) -> None:
        '''Return every component to rest and restart the clock.'''
        self._field.reset()
        self._tilt.reset()
        self._droplets.clear()
        self._time = 0.0
        self._step = 0
        self._lastResponse = TiltResponse(edgeForcingDrive=0.0, jerk=0.0, edgeForce=0.0)
        self._snapshot = self._buildSnapshot(0.0, [], 0)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def field(self) -> SurfaceField:
        return self._field

    @property
    def tilt(self) -> TiltDynamics:
        return self._tilt

    @property
    def droplets(self) -> DropletSystem:
        return self._droplets

    @property
    def snapshot(self) -> FrameSnapshot:
        '''Most recent completed frame.'''
        return self._snapshot

    @property
    def lastResponse(self) -> TiltResponse:
        '''Tilt forcing terms from the most recent step.'''
        return self._lastResponse

    @property
    def time(self) -> float:
        return self._time

    @property
    def stepCount(self) -> int:
        return self._step
