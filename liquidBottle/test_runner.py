# -- Runner Tests -- #

'''
End-to-end tests for the headless session runner and CLI.

Sean Bowman [10/18/2026]
'''

import os

import numpy as np
import pytest

from liquidBottle.core.protocols import LiveParameters, SimulationConfig
from liquidBottle.runner import SloshRunner, buildParser, frameTimes, main


def testFrameTimesSumToDuration():
    times = list(frameTimes(1.0, 60.0))
    assert sum(times) == pytest.approx(1.0, abs=1.0 / 60.0)
    assert all(t == pytest.approx(1.0 / 60.0) for t in times)


def testJitteredFrameTimes():
    times = np.array(list(frameTimes(2.0, 60.0, jitter=0.5, seed=3)))
    assert np.all(times >= 0.5 / 60.0)
    assert np.all(times <= 1.5 / 60.0)
    assert np.std(times) > 0.0


@pytest.mark.parametrize('fps, jitter', [(0.0, 0.0), (60.0, 1.5)])
def testFrameTimesRejectsBadArguments(fps, jitter):
    with pytest.raises(ValueError):
        list(frameTimes(1.0, fps, jitter))


def testRunSessionExportsEverything(tmp_path):
    runner = SloshRunner()
    results = runner.runSession(
        SimulationConfig(seed=21, spawnProbability=1.0),
        LiveParameters(strength=100.0),
        scenarioName='shake',
        duration=1.5,
        jitter=0.3,
        exportDir=str(tmp_path),
        doPlot=True,
        doAudio=True,
    )

    assert results['exportPath'] is not None and os.path.isfile(results['exportPath'])
    assert all(os.path.isfile(p) for p in results['plotPaths'])
    assert os.path.isfile(results['audioPath'])
    assert results['totalSpawned'] > 0
    assert results['finalState'].time == pytest.approx(1.5, abs=0.04)
    assert len(runner.states) > 1


def testRunSessionWithoutExport(tmp_path):
    runner = SloshRunner()
    results = runner.runSession(
        SimulationConfig(seed=1),
        LiveParameters(),
        scenarioName='idle',
        duration=0.5,
        doExport=False,
        exportDir=str(tmp_path),
    )
    assert results['exportPath'] is None
    assert results['peakHeight'] == 0.0
    assert os.listdir(tmp_path) == []


def testRunnerStartsFreshHistoryEachSession(tmp_path):
    runner = SloshRunner()
    kwargs = dict(scenarioName='idle', duration=0.5, doExport=False, exportDir=str(tmp_path))

    first = runner.runSession(SimulationConfig(seed=1), LiveParameters(), **kwargs)
    nStates = len(runner.states)
    second = runner.runSession(SimulationConfig(seed=1), LiveParameters(), **kwargs)

    assert len(runner.states) == nStates
    assert second['nFrames'] == first['nFrames']


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.scenario == 'tiltRight'
    assert args.preset == 'default'
    assert args.fps == 60.0
    assert not args.no_export


def testMainRunsSweep(capsys):
    main(['--sweep', '2', '--duration', '1.0', '--seed', '4'])
    out = capsys.readouterr().out
    assert 'STABILITY SWEEP' in out
    assert 'Passed:' in out


def testMainRunsSession(tmp_path, capsys):
    main(['--scenario', 'swirl', '--duration', '0.5', '--preset', 'phone',
          '--seed', '2', '--output-dir', str(tmp_path)])
    out = capsys.readouterr().out
    assert 'SESSION SUMMARY' in out
    assert any(name.startswith('liquidBottle_swirl_') for name in os.listdir(tmp_path))
