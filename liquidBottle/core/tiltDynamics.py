# -- Tilt / Level Dynamics -- #

'''
Second-order damped oscillator turning steering input into container
tilt and fill-level offset.

The tilt angle chases a target set by steering-x with stiffness k
and damping d (brief overshoot, then settle). The level offset lags
steering-y with a first-order response. Jerk, the clamped rate of
change of steering-x, drives edge forcing and droplet ejection.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

from dataclasses import dataclass, replace

from liquidBottle import constants as const
from liquidBottle.core.protocols import SteeringVector
from liquidBottle.utilsLB import clamp


@dataclass
class TiltState:
    '''
    Container attitude.

    Parameters:
    -----------
    angleDeg : float
        Tilt angle [deg]; positive lowers the right side on screen
    angleVelocity : float
        Tilt angular velocity [deg/s]
    levelOffset : float
        Fill-line offset [px], downward positive
    previousSteeringX : float
        Scaled steering-x from the previous step (jerk memory)
    '''

    angleDeg: float = 0.0
    angleVelocity: float = 0.0
    levelOffset: float = 0.0
    previousSteeringX: float = 0.0

    def copy(self) -> TiltState:
        return replace(self)

    @property
    def activity(self) -> float:
        '''Crest shaping amount in [0, 1] from the tilt rate.'''
        return clamp(abs(self.angleVelocity) * const.activityGain, 0.0, 1.0)


@dataclass(frozen=True)
class TiltResponse:
    '''Forcing terms produced by one tilt step.'''

    edgeForcingDrive: float
    jerk: float
    edgeForce: float


class TiltDynamics:
    '''
    Advances TiltState from the steering vector.

    Parameters:
    -----------
    state : TiltState | None
        Initial attitude (defaults to rest)
    '''

    def __init__(self, state: TiltState | None = None) -> None:
        self.state = state if state is not None else TiltState()

    def targetAngle(self, steeringX: float, strength: float) -> float:
        '''Tilt target [deg] for scaled steering-x and strength in [0, 1].'''
        target = steeringX * (const.tiltStrengthBase + strength) * const.tiltGain
        return clamp(target, -const.maxTiltDeg, const.maxTiltDeg)

    def advance(
        self,
        dt: float,
        steering: SteeringVector,
        strength: float,
        sensitivity: float,
    ) -> TiltResponse:
        '''
        Advance the tilt oscillator and level lag by dt.

        Parameters:
        -----------
        dt : float
            Step size [s]
        steering : SteeringVector
            Normalized input (already idle-decayed)
        strength : float
            Strength in [0, 1]
        sensitivity : float
            Input gain (0.5 - 2.5)

        Returns:
        --------
        TiltResponse : Edge forcing drive, jerk, and strength-scaled edge force
        '''
        s = self.state
        strength = clamp(strength, 0.0, 1.0)

        x = clamp(steering.x * sensitivity, -1.0, 1.0)
        y = clamp(steering.y * sensitivity, -1.0, 1.0)

        # Damped oscillator toward the target angle
        target = self.targetAngle(x, strength)
        s.angleVelocity += (
            (target - s.angleDeg) * const.tiltStiffness
            - s.angleVelocity * const.tiltDamping
        ) * dt
        s.angleDeg += s.angleVelocity * dt

        # First-order lag of the fill line
        s.levelOffset += ((-y * const.levelGain) - s.levelOffset) * (const.levelRate * dt)

        # Jerk from the steering-x finite difference
        jerk = clamp(
            (x - s.previousSteeringX) / max(const.minJerkDt, dt),
            -const.maxJerk, const.maxJerk,
        )
        s.previousSteeringX = x

        drive = clamp(
            s.angleVelocity * const.driveAngleGain + jerk * const.driveJerkGain,
            -const.maxDrive, const.maxDrive,
        )
        edgeForce = drive * const.edgeBoost * (const.tiltStrengthBase + strength)

        return TiltResponse(edgeForcingDrive=drive, jerk=jerk, edgeForce=edgeForce)

    def reset(self) -> None:
        self.state = TiltState()
