# -- Steering Scenarios Package -- #

'''
Scripted steering inputs for headless simulation sessions.

Sean Bowman [10/18/2026]
'''

from liquidBottle.scenarios.steeringScripts import (
    ConstantSteering,
    ScriptedSteering,
    SteeringScenario,
    SCENARIOS,
    createScenario,
)
