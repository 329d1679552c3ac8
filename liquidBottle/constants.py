# -- Tuned Constants for the Liquid Bottle Simulation -- #

'''
Numerical constants for the liquid slosh simulation.

These values are tuned for visual plausibility rather than derived
from a physical model. Screen units are pixels (y grows downward),
time is in seconds, angles in degrees unless noted otherwise.

Sean Bowman [10/18/2026]
'''

#--------------------------------------------------------------------#
# -- Surface Field -- #
#--------------------------------------------------------------------#

# Default number of surface sample points
defaultPointCount: int = 64

# Restoring spring constant per sample [1/s^2]
tension: float = 95.0

# Velocity decay rate at zero strength [1/s]
baseDamping: float = 5.1

# Damping removed at full strength [1/s]
# D = baseDamping - strength * strengthDampingRelief
strengthDampingRelief: float = 1.2

# Neighbour coupling constant [1/s]
coupling: float = 20.0

# Diffusive coupling passes per step
# Two passes approximate a stiffer propagation term without an implicit solve
couplingPasses: int = 2

# Crest shaping exponent: shaped = |h|^crestExponent
crestExponent: float = 0.85

# Crest activity per unit of tilt angular velocity [s/deg]
activityGain: float = 0.07

# Displacement gain: amplitudeBase + strength[0-100] / amplitudeDivisor
amplitudeBase: float = 0.85
amplitudeDivisor: float = 120.0

# Visible slope of the resting surface per unit tan(tilt)
slopeGain: float = 0.34

# Impulse power range for local injection
minInjectionPower: float = 0.6
maxInjectionPower: float = 4.0

# Impulse half-width in samples (kick spans +/- this many points)
impulseHalfWidth: int = 2

#--------------------------------------------------------------------#
# -- Tilt / Level Dynamics -- #
#--------------------------------------------------------------------#

# Tilt oscillator stiffness k and damping d
# Damping ratio ~0.47: brief overshoot, then settles like a held bottle
tiltStiffness: float = 9.5
tiltDamping: float = 2.9

# Target tilt = x * (tiltStrengthBase + strength) * tiltGain [deg]
tiltStrengthBase: float = 0.25
tiltGain: float = 16.0
maxTiltDeg: float = 20.0

# Level offset target = -y * levelGain [px], relaxed at levelRate [1/s]
levelGain: float = 6.0
levelRate: float = 1.0

# Jerk = d(steeringX)/dt, clamped to +/- maxJerk [1/s]
maxJerk: float = 14.0

# dt floor used for the jerk finite difference [s]
minJerkDt: float = 0.001

# Edge drive = clamp(angleVel * driveAngleGain + jerk * driveJerkGain)
driveAngleGain: float = 0.06
driveJerkGain: float = 0.012
maxDrive: float = 1.8

# Edge forcing = drive * edgeBoost * (tiltStrengthBase + strength)
edgeBoost: float = 30.0

#--------------------------------------------------------------------#
# -- Droplets -- #
#--------------------------------------------------------------------#

# Pool capacity
defaultMaxDroplets: int = 40

# Spawn trigger: |jerk| > jerkThreshold, with probability spawnProbability
jerkThreshold: float = 6.2
spawnProbability: float = 0.70

# Burst size = min(maxSpawnBurst, floor(|jerk| - spawnOffset))
spawnOffset: float = 5.5
maxSpawnBurst: int = 4

# Spawn placement: distance from the wall and vertical jitter [px]
spawnWallInset: float = 10.0
spawnHeightJitter: float = 10.0

# Reference frame rate used to express the tuned launch speeds in px/s
referenceFrameRate: float = 60.0

# Launch speed ranges [px/frame at referenceFrameRate]
spawnSpeedX: tuple[float, float] = (2.4, 3.2)     # base, random span
spawnSpeedY: tuple[float, float] = (4.2, 4.6)
spawnStrengthX: float = 0.6
spawnStrengthY: float = 0.7

# Radius range [px]
spawnRadius: tuple[float, float] = (2.1, 1.3)     # base, random span

# Gravity [px/s^2]
gravity: float = 1550.0

# Air drag per reference frame, applied as drag ** (dt * referenceFrameRate)
airDrag: float = 0.985

# Life decay [1/s]
lifeDecay: float = 0.45

# Margin beyond the container before a droplet is discarded [px]
exitMargin: float = 40.0

# Impact power = clamp(speed / impactSpeedScale, minImpactPower, maxImpactPower)
impactSpeedScale: float = 700.0
minImpactPower: float = 0.8
maxImpactPower: float = 3.2

#--------------------------------------------------------------------#
# -- Frame Clock -- #
#--------------------------------------------------------------------#

# Largest step accepted from the frame clock [s]
maxFrameTime: float = 0.033

#--------------------------------------------------------------------#
# -- Container -- #
#--------------------------------------------------------------------#

# Default container size [px]
defaultContainerWidth: float = 320.0
defaultContainerHeight: float = 520.0
