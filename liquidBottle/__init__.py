# -- Liquid Bottle Package -- #

'''
Real-time liquid slosh simulation.

A damped, tension-coupled 1-D surface field, tilt/level dynamics
driven by steering input, and a pool of splash droplets that fall
back and ripple the surface on impact.

Sean Bowman [10/18/2026]
'''

__version__ = '0.1.0'

from liquidBottle.core.protocols import SimulationConfig, LiveParameters, SteeringVector
from liquidBottle.core.frameStepper import FrameStepper
