# -- Liquid Surface Field -- #

'''
1-D damped spring network approximating the liquid free surface.

N evenly spaced samples across the container each carry a height
and a vertical velocity. Index 0 and N-1 are the walls where tilt
forcing enters; droplet impacts add local velocity kicks.

Algorithm per step:
    1. Edge forcing (anti-symmetric): v[0] += F*dt, v[N-1] -= F*dt
    2. Per sample, semi-implicit Euler with exponential damping:
           v += -h * T * dt
           v *= exp(-D * dt)
           h += v * dt
    3. Diffusive neighbour coupling (repeated couplingPasses times):
           delta = (h[i] - h[i-1]) * C * dt
           v[i-1] += delta,  v[i] -= delta

Exponential damping stays stable for large D*dt without clamping.
The coupling passes stand in for a stiffer wave-propagation term
without an implicit solve.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math

import numpy as np

from liquidBottle import constants as const
from liquidBottle.utilsLB import clamp, roundHalfUp


######################################################################
# -- Crest Shaping -- #
######################################################################

def crestShape(value: float, activity: float) -> float:
    '''
    Exaggerate wave crests in proportion to sloshing activity.

    shaped = sign(h) * (|h| + (|h|^0.85 - |h|) * activity)

    At activity 0 the height passes through unchanged.

    Parameters:
    -----------
    value : float
        Linear surface displacement
    activity : float
        Dynamic activity in [0, 1]

    Returns:
    --------
    float : Shaped displacement
    '''
    magnitude = abs(value)
    if magnitude == 0.0:
        return 0.0
    shaped = magnitude ** const.crestExponent
    return math.copysign(magnitude + (shaped - magnitude) * activity, value)


######################################################################
# -- Surface Field -- #
######################################################################

class SurfaceField:
    '''
    Height/velocity samples of the liquid surface.

    Arrays are allocated once and never resized.

    Parameters:
    -----------
    nPoints : int
        Number of samples N (>= 2)
    tension : float
        Restoring constant T [1/s^2]
    baseDamping : float
        Velocity decay rate at zero strength [1/s]
    strengthDampingRelief : float
        Damping removed at full strength [1/s]
    coupling : float
        Neighbour coupling constant C [1/s]
    couplingPasses : int
        Coupling passes per step
    rng : np.random.Generator | None
        Generator for impulse signs
    '''

    def __init__(
        self,
        nPoints: int = const.defaultPointCount,
        tension: float = const.tension,
        baseDamping: float = const.baseDamping,
        strengthDampingRelief: float = const.strengthDampingRelief,
        coupling: float = const.coupling,
        couplingPasses: int = const.couplingPasses,
        rng: np.random.Generator | None = None,
    ) -> None:
        if nPoints < 2:
            raise ValueError(f'SurfaceField needs at least 2 points, got {nPoints}')

        self._tension = tension
        self._baseDamping = baseDamping
        self._dampingRelief = strengthDampingRelief
        self._coupling = coupling
        self._couplingPasses = couplingPasses
        self._rng = rng if rng is not None else np.random.default_rng()

        self.heights = np.zeros(nPoints)
        self.velocities = np.zeros(nPoints)

    @property
    def nPoints(self) -> int:
        return self.heights.shape[0]

    def damping(self, strength: float = 0.0) -> float:
        '''Velocity decay rate D for strength in [0, 1].'''
        return self._baseDamping - clamp(strength, 0.0, 1.0) * self._dampingRelief

    ######################################################################
    # -- Time Step -- #
    ######################################################################

    def advance(self, dt: float, edgeForce: float, strength: float = 0.0) -> None:
        '''
        Advance every sample by dt.

        Parameters:
        -----------
        dt : float
            Step size [s]
        edgeForce : float
            Forcing injected at the walls (positive raises index 0's velocity)
        strength : float
            Strength in [0, 1]; higher strength means less damping
        '''
        h = self.heights
        v = self.velocities

        # 1. Anti-symmetric edge forcing
        kick = edgeForce * dt
        v[0] += kick
        v[-1] -= kick

        # 2. Restoring spring, exponential damping, drift
        v += -h * self._tension * dt
        v *= math.exp(-self.damping(strength) * dt)
        h += v * dt

        # 3. Diffusive neighbour coupling
        # Heights are fixed during the passes, so each pair transfer is independent
        for _ in range(self._couplingPasses):
            delta = np.diff(h) * self._coupling * dt
            transfer = np.zeros_like(v)
            transfer[:-1] += delta
            transfer[1:] -= delta
            v += transfer

    ######################################################################
    # -- Queries -- #
    ######################################################################

    def heightAt(self, position: float, activity: float = 0.0, gain: float = 1.0) -> float:
        '''
        Interpolated, crest-shaped surface displacement.

        Pure query: does not mutate the field. Rendering and droplet
        collision both sample the surface through this method.

        Parameters:
        -----------
        position : float
            Fraction across the container; clamped to [0, 1]
        activity : float
            Crest shaping amount in [0, 1]
        gain : float
            Amplitude gain applied before crest shaping

        Returns:
        --------
        float : Surface displacement (screen units, downward positive)
        '''
        f = clamp(position, 0.0, 1.0)
        idx = f * (self.nPoints - 1)
        i0 = min(int(math.floor(idx)), self.nPoints - 1)
        i1 = min(self.nPoints - 1, i0 + 1)
        t = idx - i0

        linear = (self.heights[i0] * (1.0 - t) + self.heights[i1] * t) * gain
        return crestShape(linear, clamp(activity, 0.0, 1.0))

    def heightProfile(self, activity: float = 0.0, gain: float = 1.0) -> np.ndarray:
        '''heightAt evaluated at every sample position.'''
        fractions = np.linspace(0.0, 1.0, self.nPoints)
        return np.array([self.heightAt(f, activity, gain) for f in fractions])

    ######################################################################
    # -- Local Injection -- #
    ######################################################################

    def injectImpulse(self, position: float, power: float) -> None:
        '''
        Add a localized, random-signed velocity kick.

        The kick spans the nearest +/- 2 samples with linear falloff
        (1 - |k|/3). Signs are drawn per sample so neighbouring points
        decorrelate. Non-positive power is a no-op; positive power is
        clamped to [0.6, 4.0].

        Parameters:
        -----------
        position : float
            Fraction across the container; clamped to [0, 1]
        power : float
            Impulse power
        '''
        if not power > 0.0:
            return

        p = clamp(power, const.minInjectionPower, const.maxInjectionPower)
        center = roundHalfUp(clamp(position, 0.0, 1.0) * (self.nPoints - 1))
        halfWidth = const.impulseHalfWidth

        offsets = np.arange(-halfWidth, halfWidth + 1)
        signs = np.where(self._rng.random(len(offsets)) < 0.5, -1.0, 1.0)

        for k, sign in zip(offsets, signs):
            i = center + int(k)
            if i < 0 or i >= self.nPoints:
                continue
            falloff = 1.0 - abs(int(k)) / (halfWidth + 1)
            self.velocities[i] += p * falloff * sign

    ######################################################################
    # -- Diagnostics -- #
    ######################################################################

    def kineticEnergy(self) -> float:
        '''0.5 * sum(v^2).'''
        return 0.5 * float(np.sum(self.velocities * self.velocities))

    def potentialEnergy(self) -> float:
        '''Spring energy 0.5*T*sum(h^2) plus coupling energy 0.5*C*sum(dh^2).'''
        h = self.heights
        dh = np.diff(h)
        spring = 0.5 * self._tension * float(np.sum(h * h))
        couple = 0.5 * self._coupling * float(np.sum(dh * dh))
        return spring + couple

    def maxHeight(self) -> float:
        return float(np.max(np.abs(self.heights)))

    def reset(self) -> None:
        '''Return the surface to rest.'''
        self.heights[:] = 0.0
        self.velocities[:] = 0.0
