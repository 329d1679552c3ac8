# -- Frame Exporter Tests -- #

'''
Tests for JSON frame export.

Sean Bowman [10/18/2026]
'''

import json
import os

import pytest

from liquidBottle.core.frameStepper import FrameStepper
from liquidBottle.core.protocols import LiveParameters, SimulationConfig
from liquidBottle.export.frameExporter import FrameExporter
from liquidBottle.scenarios.steeringScripts import ConstantSteering


def _record(exporter: FrameExporter, nSteps: int) -> FrameStepper:
    stepper = FrameStepper(
        SimulationConfig(seed=8, spawnProbability=1.0),
        LiveParameters(strength=90.0),
        steering=ConstantSteering(1.0, 0.0),
    )
    exporter.addFrame(stepper.snapshot)
    for _ in range(nSteps):
        exporter.addFrame(stepper.step(0.016))
    return stepper


def testExportWithoutFramesRaises(tmp_path):
    with pytest.raises(ValueError):
        FrameExporter().export(SimulationConfig(), LiveParameters(), outputDir=str(tmp_path))


def testInvalidStrideRaises():
    with pytest.raises(ValueError):
        FrameExporter(frameStride=0)


def testExportWritesNamedJson(tmp_path):
    exporter = FrameExporter()
    stepper = _record(exporter, 30)

    path = exporter.export(stepper.config, stepper.params, outputDir=str(tmp_path), scenarioName='tiltRight')
    assert os.path.basename(path).startswith('liquidBottle_tiltRight_')
    assert path.endswith('.json')

    with open(path, 'r') as f:
        data = json.load(f)

    assert set(data) == {'meta', 'config', 'params', 'frames', 'history'}
    assert data['meta']['type'] == 'liquidBottle'
    assert data['meta']['nFrames'] == 31
    assert data['config']['nPoints'] == 64
    assert data['params']['strength'] == 90.0

    frame = data['frames'][1]
    assert len(frame['surfaceY']) == 64
    assert len(frame['heights']) == 64
    # First step spawns a full burst
    assert len(frame['droplets']) == 4
    assert all(len(d) == 6 for d in frame['droplets'])
    assert len(data['history']['times']) == 31


def testFrameStrideKeepsFullHistory():
    exporter = FrameExporter(frameStride=3)
    _record(exporter, 8)
    assert exporter.nFrames == 3
    assert len(exporter.history['times']) == 9
