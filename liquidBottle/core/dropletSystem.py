# -- Splash Droplet System -- #

'''
Bounded pool of ballistic droplets ejected by sharp lateral motion.

Droplets launch from a wall, fall under gravity with frame-rate
independent air drag, and are removed when their life runs out,
when they leave the container, or when they hit the liquid surface.
Each surface hit is reported as an ImpactEvent so the caller can
route it into the surface field and the audio collaborator.

Integration per droplet:
    vy += g * dt
    (vx, vy) *= drag ** (dt * 60)
    (x, y) += (vx, vy) * dt
    life -= 0.45 * dt

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Literal

import numpy as np

from liquidBottle import constants as const
from liquidBottle.utilsLB import clamp


Side = Literal['left', 'right']


######################################################################
# -- Droplet and Impact Data -- #
######################################################################

@dataclass
class Droplet:
    '''
    One ballistic droplet in screen space (y downward).

    Parameters:
    -----------
    x, y : float
        Position [px]
    vx, vy : float
        Velocity [px/s]
    radius : float
        Radius [px]
    life : float
        Remaining life in (0, 1]
    '''

    x: float
    y: float
    vx: float
    vy: float
    radius: float
    life: float = 1.0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def copy(self) -> Droplet:
        return replace(self)


@dataclass(frozen=True)
class ImpactEvent:
    '''
    A droplet reaching the liquid surface.

    Parameters:
    -----------
    horizontalFraction : float
        Impact position across the container in [0, 1]
    speed : float
        Droplet speed at impact [px/s]
    power : float
        Injection power, clamp(speed / 700, 0.8, 3.2)
    x, y : float
        Impact point [px]
    '''

    horizontalFraction: float
    speed: float
    power: float
    x: float = 0.0
    y: float = 0.0


def impactPower(speed: float) -> float:
    '''Map impact speed [px/s] to injection power.'''
    return clamp(speed / const.impactSpeedScale, const.minImpactPower, const.maxImpactPower)


def burstSize(jerk: float) -> int:
    '''Droplets to request for a jerk above the spawn threshold.'''
    return max(0, min(const.maxSpawnBurst, int(math.floor(abs(jerk) - const.spawnOffset))))


######################################################################
# -- Droplet System -- #
######################################################################

class DropletSystem:
    '''
    Owns the active droplet pool.

    Parameters:
    -----------
    maxDroplets : int
        Pool capacity; spawn requests beyond it are dropped
    rng : np.random.Generator | None
        Generator for launch jitter
    '''

    def __init__(
        self,
        maxDroplets: int = const.defaultMaxDroplets,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._maxDroplets = maxDroplets
        self._rng = rng if rng is not None else np.random.default_rng()
        self._droplets: list[Droplet] = []

    @property
    def maxDroplets(self) -> int:
        return self._maxDroplets

    @property
    def droplets(self) -> list[Droplet]:
        '''Live droplets (owned by the system; copy before keeping).'''
        return self._droplets

    @property
    def count(self) -> int:
        return len(self._droplets)

    @property
    def remainingCapacity(self) -> int:
        return max(0, self._maxDroplets - len(self._droplets))

    ######################################################################
    # -- Spawning -- #
    ######################################################################

    def spawn(
        self,
        count: int,
        side: Side,
        surfaceYAtSpawn: float,
        containerWidth: float,
        strength: float = 0.0,
    ) -> int:
        '''
        Launch up to count droplets from one wall.

        Parameters:
        -----------
        count : int
            Droplets requested
        side : Side
            'left' or 'right' wall; droplets fly outward from it
        surfaceYAtSpawn : float
            Resting surface height at launch [px]
        containerWidth : float
            Container width [px]
        strength : float
            Strength in [0, 1]; scales launch speed

        Returns:
        --------
        int : Droplets actually admitted
        '''
        admitted = min(max(0, count), self.remainingCapacity)
        isLeft = side == 'left'
        direction = -1.0 if isLeft else 1.0
        x = const.spawnWallInset if isLeft else containerWidth - const.spawnWallInset
        fps = const.referenceFrameRate
        baseX, spanX = const.spawnSpeedX
        baseY, spanY = const.spawnSpeedY
        baseR, spanR = const.spawnRadius

        for _ in range(admitted):
            u = self._rng.random(4)
            vx = direction * (baseX + u[0] * spanX) * (const.spawnStrengthX + strength) * fps
            vy = -(baseY + u[1] * spanY) * (const.spawnStrengthY + strength) * fps
            self._droplets.append(Droplet(
                x=x,
                y=surfaceYAtSpawn - u[2] * const.spawnHeightJitter,
                vx=vx,
                vy=vy,
                radius=baseR + u[3] * spanR,
                life=1.0,
            ))

        return admitted

    def add(self, droplet: Droplet) -> bool:
        '''Admit a prepared droplet if capacity allows.'''
        if self.remainingCapacity == 0:
            return False
        self._droplets.append(droplet)
        return True

    ######################################################################
    # -- Time Step -- #
    ######################################################################

    def advance(
        self,
        dt: float,
        width: float,
        height: float,
        surfaceHeightFn: Callable[[float], float],
    ) -> list[ImpactEvent]:
        '''
        Integrate all droplets, drop expired ones, and resolve impacts.

        The pool is rebuilt from survivors, so removal never skips
        or double-visits an entry.

        Parameters:
        -----------
        dt : float
            Step size [s]
        width, height : float
            Container size [px]
        surfaceHeightFn : Callable[[float], float]
            Surface screen y for a horizontal fraction in [0, 1]

        Returns:
        --------
        list[ImpactEvent] : Impacts resolved this step
        '''
        impacts: list[ImpactEvent] = []
        survivors: list[Droplet] = []
        drag = const.airDrag ** (dt * const.referenceFrameRate)
        margin = const.exitMargin

        for d in self._droplets:
            d.vy += const.gravity * dt
            d.vx *= drag
            d.vy *= drag
            d.x += d.vx * dt
            d.y += d.vy * dt
            d.life -= const.lifeDecay * dt

            if d.life <= 0.0 or d.y > height + margin or d.x < -margin or d.x > width + margin:
                continue

            fraction = clamp(d.x / width, 0.0, 1.0)
            if d.y >= surfaceHeightFn(fraction):
                speed = d.speed
                impacts.append(ImpactEvent(
                    horizontalFraction=fraction,
                    speed=speed,
                    power=impactPower(speed),
                    x=d.x,
                    y=d.y,
                ))
                continue

            survivors.append(d)

        self._droplets = survivors
        return impacts

    def clear(self) -> None:
        self._droplets = []
