# -- Configuration and Parameter Tests -- #

'''
Tests for SimulationConfig validation/loading and LiveParameters.

Sean Bowman [10/18/2026]
'''

import dataclasses
import json

import pytest

from liquidBottle.core.protocols import LiveParameters, SimulationConfig, SteeringVector


def testDefaults():
    config = SimulationConfig()
    assert config.nPoints == 64
    assert config.maxDroplets == 40
    assert config.couplingPasses == 2
    assert config.maxFrameTime == pytest.approx(0.033)


@pytest.mark.parametrize('kwargs', [
    {'nPoints': 1},
    {'maxDroplets': -1},
    {'containerWidth': 0.0},
    {'containerHeight': -5.0},
    {'couplingPasses': -1},
    {'maxFrameTime': 0.0},
])
def testInvalidConfigRaises(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


def testSpawnProbabilityIsClamped():
    assert SimulationConfig(spawnProbability=3.0).spawnProbability == 1.0
    assert SimulationConfig(spawnProbability=-1.0).spawnProbability == 0.0


def testConfigIsFixedAtConstruction():
    config = SimulationConfig(seed=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.seed = 2

    reseeded = dataclasses.replace(config, seed=2)
    assert reseeded.seed == 2
    assert config.seed == 1


def testPresets():
    assert SimulationConfig.phone().containerWidth == 260.0
    assert SimulationConfig.desktop().containerHeight == 620.0


def testFromJson(tmp_path):
    path = tmp_path / 'bottle.json'
    path.write_text(json.dumps({
        'container': {'width': 200, 'height': 400},
        'surface': {'nPoints': 32, 'couplingPasses': 1},
        'droplets': {'maxDroplets': 10},
        'session': {'seed': 9},
    }))
    config = SimulationConfig.fromJson(str(path))
    assert config.containerWidth == 200
    assert config.containerHeight == 400
    assert config.nPoints == 32
    assert config.couplingPasses == 1
    assert config.maxDroplets == 10
    assert config.seed == 9
    assert config.tension == pytest.approx(95.0)


def testFromJsonValidates(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'surface': {'nPoints': 1}}))
    with pytest.raises(ValueError):
        SimulationConfig.fromJson(str(path))


def testLiveParameterDerivedValues():
    params = LiveParameters(strength=60.0, fill=55.0, sensitivity=25.0)
    assert params.strengthFactor == pytest.approx(0.6)
    assert params.fillFactor == pytest.approx(0.55)
    assert params.sensitivityGain == pytest.approx(1.0)
    assert params.amplitudeGain == pytest.approx(0.85 + 60.0 / 120.0)


def testLiveParametersClampOnRead():
    params = LiveParameters(strength=250.0, fill=-10.0, sensitivity=500.0)
    assert params.strengthFactor == 1.0
    assert params.fillFactor == 0.0
    assert params.sensitivityGain == pytest.approx(2.5)


def testSteeringVectorClamped():
    v = SteeringVector(3.0, -2.0).clamped()
    assert (v.x, v.y) == (1.0, -1.0)
