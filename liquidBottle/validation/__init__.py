# -- Validation Package -- #

'''
Randomized stability checks for the slosh simulation.

Sean Bowman [10/18/2026]
'''

from liquidBottle.validation.stabilitySweep import (
    RandomSteering,
    SweepResult,
    runStabilitySweep,
    summarizeSweep,
)
