# -- General Utilities for the Liquid Bottle Package -- #

'''
Small numeric and color helpers shared by the simulation core
and the rendering collaborator.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import math


#--------------------------------------------------------------------#
# -- Numeric Helpers -- #
#--------------------------------------------------------------------#

def clamp(value: float, lower: float, upper: float) -> float:
    '''Clamp value into [lower, upper].'''
    return max(lower, min(upper, value))


def roundHalfUp(value: float) -> int:
    '''Round to the nearest integer, halves rounding toward +inf.'''
    return int(math.floor(value + 0.5))


def finiteOrZero(value: float | None) -> float:
    '''Treat missing or non-finite readings as zero.'''
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


#--------------------------------------------------------------------#
# -- Color Helpers -- #
#--------------------------------------------------------------------#

def hexToRgb(hexColor: str) -> tuple[int, int, int]:
    '''
    Convert a '#rrggbb' string into an (r, g, b) tuple.

    Parameters:
    -----------
    hexColor : str
        Hex color, with or without the leading '#'

    Returns:
    --------
    tuple[int, int, int] : Red, green, blue channels (0-255)
    '''
    digits = hexColor.strip().lstrip('#')
    if len(digits) != 6:
        raise ValueError(f'Expected a 6-digit hex color, got "{hexColor}"')
    n = int(digits, 16)
    return ((n >> 16) & 255, (n >> 8) & 255, n & 255)
