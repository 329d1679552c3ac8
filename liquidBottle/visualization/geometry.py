# -- Render Geometry -- #

'''
Screen-space shapes derived from a completed FrameSnapshot.

The surface curve reuses the snapshot's physical surface samples
and adds a small cosmetic ripple while the bottle is moving.
Droplets become ellipses stretched along their velocity. The
liquid gradient brightens toward the surface.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from liquidBottle.core.protocols import FrameSnapshot
from liquidBottle.core.dropletSystem import Droplet
from liquidBottle.utilsLB import clamp, hexToRgb


#--------------------------------------------------------------------#
# -- Render Tuning -- #
#--------------------------------------------------------------------#

# Cosmetic ripple: sin(f * rippleWaves * pi + timeMs * rippleRate) * rippleAmplitude * activity
rippleWaves: float = 6.0
rippleRate: float = 0.01
rippleAmplitude: float = 1.4

# Droplet stretch: speed at full stretch [px/s]
fullStretchSpeed: float = 900.0
stretchLength: float = 2.2
stretchNarrowing: float = 0.25


######################################################################
# -- Surface Curve -- #
######################################################################

def buildSurfaceCurve(
    snapshot: FrameSnapshot,
    timeS: float | None = None,
    ripple: bool = True,
) -> tuple[np.ndarray, np.ndarray]:
    '''
    Screen points of the liquid surface for drawing.

    Parameters:
    -----------
    snapshot : FrameSnapshot
        Completed frame
    timeS : float | None
        Clock for the cosmetic ripple [s]; defaults to snapshot time
    ripple : bool
        Add the cosmetic ripple

    Returns:
    --------
    tuple[np.ndarray, np.ndarray] : (x, y) arrays of length N [px]
    '''
    x = snapshot.sampleX
    y = np.array(snapshot.surfaceY, dtype=float)

    if ripple and snapshot.activity > 0.0:
        t = snapshot.time if timeS is None else timeS
        fractions = np.linspace(0.0, 1.0, snapshot.nPoints)
        y = y + np.sin(fractions * math.pi * rippleWaves + t * 1000.0 * rippleRate) * (
            rippleAmplitude * snapshot.activity
        )

    return x, y


def buildLiquidPolygon(
    snapshot: FrameSnapshot,
    timeS: float | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    '''Closed outline of the liquid body: bottom-left, surface, bottom-right.'''
    sx, sy = buildSurfaceCurve(snapshot, timeS)
    w = snapshot.containerWidth
    h = snapshot.containerHeight
    x = np.concatenate([[0.0], sx, [w, 0.0]])
    y = np.concatenate([[h], sy, [h, h]])
    return x, y


######################################################################
# -- Droplet Shapes -- #
######################################################################

@dataclass(frozen=True)
class DropletShape:
    '''
    Velocity-stretched ellipse for one droplet.

    Parameters:
    -----------
    x, y : float
        Centre [px]
    length : float
        Semi-axis along the velocity [px]
    width : float
        Semi-axis across the velocity [px]
    angle : float
        Orientation of the long axis [rad]
    '''

    x: float
    y: float
    length: float
    width: float
    angle: float

    def outline(self, nPoints: int = 24) -> tuple[np.ndarray, np.ndarray]:
        '''Polygon approximation of the ellipse in screen space.'''
        theta = np.linspace(0.0, 2.0 * math.pi, nPoints + 1)
        ex = self.length * np.cos(theta)
        ey = self.width * np.sin(theta)
        c, s = math.cos(self.angle), math.sin(self.angle)
        return (self.x + ex * c - ey * s, self.y + ex * s + ey * c)


def buildDropletShapes(droplets: Iterable[Droplet]) -> list[DropletShape]:
    '''Ellipse for each droplet; faster droplets are longer and thinner.'''
    shapes: list[DropletShape] = []
    for d in droplets:
        stretch = clamp(d.speed / fullStretchSpeed, 0.0, 1.0)
        shapes.append(DropletShape(
            x=d.x,
            y=d.y,
            length=d.radius * (1.0 + stretchLength * stretch),
            width=d.radius * (1.0 - stretchNarrowing * stretch),
            angle=math.atan2(d.vy, d.vx),
        ))
    return shapes


######################################################################
# -- Liquid Gradient -- #
######################################################################

@dataclass(frozen=True)
class LiquidGradient:
    '''Vertical gradient stops (top at the surface, bottom at the floor).'''

    top: str
    middle: str
    bottom: str

    @property
    def stops(self) -> list[tuple[float, str]]:
        return [(0.0, self.top), (0.55, self.middle), (1.0, self.bottom)]


def _rgba(r: int, g: int, b: int, alpha: float) -> str:
    return f'rgba({r},{g},{b},{alpha})'


def liquidGradient(hexColor: str) -> LiquidGradient:
    '''
    Gradient stops for a liquid base color.

    Parameters:
    -----------
    hexColor : str
        Base liquid color '#rrggbb'

    Returns:
    --------
    LiquidGradient : Lighter near the surface, darker near the floor
    '''
    r, g, b = hexToRgb(hexColor)
    return LiquidGradient(
        top=_rgba(min(255, r + 70), min(255, g + 90), min(255, b + 100), 0.84),
        middle=_rgba(min(255, r + 20), min(255, g + 40), min(255, b + 50), 0.92),
        bottom=_rgba(max(0, r - 30), max(0, g - 30), max(0, b - 10), 0.96),
    )
