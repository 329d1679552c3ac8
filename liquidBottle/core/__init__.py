# -- Slosh Simulation Core Package -- #

'''
Surface field, tilt/level dynamics, droplet system, and the
frame stepper that advances them together.

Sean Bowman [10/18/2026]
'''

from liquidBottle.core.protocols import (
    SimulationConfig,
    LiveParameters,
    SteeringVector,
    SimulationState,
    FrameSnapshot,
)
from liquidBottle.core.surfaceField import SurfaceField, crestShape
from liquidBottle.core.tiltDynamics import TiltState, TiltResponse, TiltDynamics
from liquidBottle.core.dropletSystem import Droplet, ImpactEvent, DropletSystem
from liquidBottle.core.frameStepper import FrameStepper
