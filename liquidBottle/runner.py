# -- Liquid Bottle Runner -- #

'''
Command-line entry point for headless liquid bottle sessions.

Runs a scripted steering scenario through the frame stepper at a
fixed (optionally jittered) frame rate, prints progress, and
optionally exports frame data, a Plotly dashboard, and a WAV track
of the droplet splashes.

Usage:
    python -m liquidBottle                                 # Default tiltRight scenario
    python -m liquidBottle --scenario shake --plot --audio
    python -m liquidBottle --preset phone --jitter 0.4 --seed 7
    python -m liquidBottle --config configs/bottle.json
    python -m liquidBottle --sweep 25                      # Randomized stability sweep
    python -m liquidBottle --scenario swirl --animate      # Render with Manim

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import argparse
import os
import time as timeModule
from dataclasses import replace

import numpy as np

from liquidBottle.core.frameStepper import FrameStepper
from liquidBottle.core.protocols import LiveParameters, SimulationConfig, SimulationState
from liquidBottle.audio.splashSynth import SplashSynth
from liquidBottle.export.frameExporter import FrameExporter
from liquidBottle.scenarios.steeringScripts import SCENARIOS, createScenario
from liquidBottle.validation.stabilitySweep import runStabilitySweep, summarizeSweep


PRESETS = {
    'default': SimulationConfig,
    'phone': SimulationConfig.phone,
    'desktop': SimulationConfig.desktop,
}


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='liquidBottle -- real-time liquid slosh simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file',
    )
    parser.add_argument(
        '--scenario', type=str, default='tiltRight',
        choices=list(SCENARIOS.keys()),
        help='Scripted steering scenario (default: tiltRight)',
    )
    parser.add_argument(
        '--preset', type=str, default='default',
        choices=list(PRESETS.keys()),
        help='Container preset (default: default)',
    )
    parser.add_argument(
        '--duration', type=float, default=None,
        help='Session length in seconds (default: scenario length)',
    )
    parser.add_argument(
        '--fps', type=float, default=60.0,
        help='Nominal frame rate (default: 60)',
    )
    parser.add_argument(
        '--jitter', type=float, default=0.0,
        help='Relative frame-time jitter in [0, 1] (default: 0)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for the session random generator',
    )
    parser.add_argument('--strength', type=float, default=60.0, help='Slosh strength 0-100')
    parser.add_argument('--fill', type=float, default=55.0, help='Fill level 0-100')
    parser.add_argument('--sensitivity', type=float, default=25.0, help='Input sensitivity 0-100')
    parser.add_argument('--color', type=str, default='#2f8cff', help='Liquid color (hex)')
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--output-dir', type=str, default='liquidBottle/output',
        help='Output directory for exports (default: liquidBottle/output)',
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Write a Plotly HTML dashboard and final frame',
    )
    parser.add_argument(
        '--audio', action='store_true',
        help='Write a WAV track of the droplet splashes',
    )
    parser.add_argument(
        '--sweep', type=int, default=None, metavar='N_RUNS',
        help='Run a randomized stability sweep instead of a session',
    )
    parser.add_argument(
        '--animate', action='store_true',
        help='Render the exported session with Manim',
    )

    return parser


#--------------------------------------------------------------------#
# -- Frame Clock -- #
#--------------------------------------------------------------------#

def frameTimes(duration: float, fps: float, jitter: float = 0.0, seed: int | None = None):
    '''
    Yield frame times [s] until their sum reaches duration.

    With jitter j each frame lasts (1/fps) * (1 + U(-j, j)); values
    are not clamped here, the stepper does that.
    '''
    if fps <= 0.0:
        raise ValueError(f'fps must be positive, got {fps}')
    if not 0.0 <= jitter <= 1.0:
        raise ValueError(f'jitter must be in [0, 1], got {jitter}')

    rng = np.random.default_rng(seed)
    nominal = 1.0 / fps
    elapsed = 0.0
    while elapsed < duration - 1e-12:
        dt = nominal * (1.0 + jitter * rng.uniform(-1.0, 1.0)) if jitter > 0.0 else nominal
        elapsed += dt
        yield dt


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class SloshRunner:
    '''
    Runs a scripted slosh session and stores results.

    Handles the full pipeline: session setup, stepping loop with
    progress reporting, and optional export of frames, plots, and
    audio.
    '''

    def __init__(self, frameStride: int = 2) -> None:
        self._frameStride = frameStride
        self._states: list[SimulationState] = []
        self._exporter: FrameExporter = FrameExporter(frameStride=frameStride)

    @property
    def states(self) -> list[SimulationState]:
        return self._states

    def runSession(
        self,
        config: SimulationConfig,
        params: LiveParameters,
        scenarioName: str = 'tiltRight',
        duration: float | None = None,
        fps: float = 60.0,
        jitter: float = 0.0,
        doExport: bool = True,
        exportDir: str = 'liquidBottle/output',
        doPlot: bool = False,
        doAudio: bool = False,
        doAnimate: bool = False,
    ) -> dict:
        '''
        Run one scripted session.

        Parameters:
        -----------
        config : SimulationConfig
            Session configuration
        params : LiveParameters
            Live controls
        scenarioName : str
            Key from SCENARIOS
        duration : float | None
            Session length [s]; defaults to the scenario's length
        fps : float
            Nominal frame rate
        jitter : float
            Relative frame-time jitter in [0, 1]
        doExport : bool
            Whether to export frame data
        exportDir : str
            Output directory for all exports
        doPlot : bool
            Write Plotly HTML figures
        doAudio : bool
            Write a WAV splash track
        doAnimate : bool
            Render the export with Manim (requires doExport)

        Returns:
        --------
        dict : Session results summary
        '''
        scenario, steering = createScenario(scenarioName)
        duration = scenario.duration if duration is None else duration

        # Fresh history per session
        self._states = []
        self._exporter = FrameExporter(frameStride=self._frameStride)

        synth = SplashSynth(seed=config.seed)
        if doAudio:
            synth.enable()

        stepper = FrameStepper(config, params, steering=steering, audio=synth)

        print()
        print('=' * 62)
        print('  LIQUID BOTTLE -- SLOSH SESSION')
        print('=' * 62)
        print()

        #--------------------------------------------------------------------#
        # Session Setup
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  SESSION SETUP')
        print('-' * 62)
        print(f'  Scenario:          {scenario.name} -- {scenario.description}')
        print(f'  Container:         {config.containerWidth:6.0f} x {config.containerHeight:.0f} px')
        print(f'  Surface Points:    {config.nPoints:8d}')
        print(f'  Max Droplets:      {config.maxDroplets:8d}')
        print(f'  Strength:          {params.strength:8.1f}')
        print(f'  Fill:              {params.fill:8.1f} %')
        print(f'  Sensitivity:       {params.sensitivity:8.1f}  (gain {params.sensitivityGain:.2f})')
        print(f'  Frame Rate:        {fps:8.1f} fps  (jitter {jitter:.2f})')
        print(f'  Duration:          {duration:8.2f} s')
        print(f'  Seed:              {config.seed}')
        print()

        self._exporter.addFrame(stepper.snapshot)
        self._states.append(stepper.snapshot.state)

        #--------------------------------------------------------------------#
        # Stepping Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING SESSION')
        print('-' * 62)
        print()
        print(f'  {"Time":>8}  {"Step":>6}  {"Angle":>8}  {"Level":>7}  {"Max|h|":>8}  {"Drops":>5}  {"Hits":>5}')
        print(f'  {"(s)":>8}  {"":>6}  {"(deg)":>8}  {"(px)":>7}  {"(px)":>8}  {"":>5}  {"":>5}')
        print('  ' + '-' * 58)

        wallClockStart = timeModule.time()
        printInterval = max(0.1, duration / 20.0)
        nextPrintTime = printInterval
        totalImpacts = 0
        totalSpawned = 0
        peakHeight = 0.0

        for dt in frameTimes(duration, fps, jitter, config.seed):
            synth.currentTime = stepper.time
            snapshot = stepper.step(dt)
            steering.advance(min(dt, config.maxFrameTime))

            state = snapshot.state
            self._states.append(state)
            self._exporter.addFrame(snapshot)
            totalImpacts += state.nImpacts
            totalSpawned += state.nSpawned
            peakHeight = max(peakHeight, state.maxHeight)

            if state.time >= nextPrintTime:
                print(
                    f'  {state.time:8.3f}  {state.step:6d}  {state.angleDeg:8.3f}  '
                    f'{state.levelOffset:7.3f}  {state.maxHeight:8.4f}  '
                    f'{state.nDroplets:5d}  {totalImpacts:5d}'
                )
                nextPrintTime += printInterval

        wallClockSeconds = timeModule.time() - wallClockStart
        finalSnapshot = stepper.snapshot
        finalState = finalSnapshot.state

        print()
        print(f'  Session complete.')
        print(f'  Total steps:       {finalState.step:8d}')
        print(f'  Wall-clock time:   {wallClockSeconds:8.2f} s')
        print(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        print()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        plotPaths: list[str] = []
        audioPath = None

        if doExport or doPlot or doAudio:
            print('-' * 62)
            print('  EXPORTING')
            print('-' * 62)

        if doExport:
            exportPath = self._exporter.export(
                config=config,
                params=params,
                outputDir=exportDir,
                scenarioName=scenario.name,
            )
            print(f'  Frames:    {exportPath}')

        if doPlot:
            plotPaths = self._writePlots(finalSnapshot, scenario.name, exportDir)
            for path in plotPaths:
                print(f'  Plot:      {path}')

        if doAudio:
            os.makedirs(exportDir, exist_ok=True)
            audioPath = synth.writeWav(
                os.path.join(exportDir, f'liquidBottle_{scenario.name}_splashes.wav'),
                duration=stepper.time,
            )
            print(f'  Audio:     {audioPath}  ({len(synth.voices)} splashes)')

        if doExport or doPlot or doAudio:
            print()

        if doAnimate:
            if exportPath is None:
                print('  Skipping animation: frame export is disabled.')
            else:
                from liquidBottle.animations.render import renderScene
                renderScene('bottle', 'low', exportPath)

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        print('=' * 62)
        print('  SESSION SUMMARY')
        print('=' * 62)
        print(f'  Final Angle:       {finalState.angleDeg:10.4f} deg')
        print(f'  Final Level:       {finalState.levelOffset:10.4f} px')
        print(f'  Final KE:          {finalState.kineticEnergy:10.6f}')
        print(f'  Final PE:          {finalState.potentialEnergy:10.6f}')
        print(f'  Peak |height|:     {peakHeight:10.4f} px')
        print(f'  Droplets Spawned:  {totalSpawned:10d}')
        print(f'  Droplet Impacts:   {totalImpacts:10d}')
        print('=' * 62)
        print()

        return {
            'finalState': finalState,
            'finalSnapshot': finalSnapshot,
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'peakHeight': peakHeight,
            'totalSpawned': totalSpawned,
            'totalImpacts': totalImpacts,
            'exportPath': exportPath,
            'plotPaths': plotPaths,
            'audioPath': audioPath,
        }

    def _writePlots(self, snapshot, scenarioName: str, outputDir: str) -> list[str]:
        '''Write the session dashboard and the final frame as HTML.'''
        from liquidBottle.visualization.plots import plotFrame, plotHistory

        os.makedirs(outputDir, exist_ok=True)
        historyPath = os.path.join(outputDir, f'liquidBottle_{scenarioName}_history.html')
        framePath = os.path.join(outputDir, f'liquidBottle_{scenarioName}_frame.html')

        plotHistory(self._states, title=f'Slosh Session -- {scenarioName}').write_html(historyPath)
        plotFrame(snapshot).write_html(framePath)
        return [historyPath, framePath]

    def runSweep(self, nRuns: int, duration: float = 10.0, seed: int | None = None,
                 config: SimulationConfig | None = None) -> dict:
        '''Run a randomized stability sweep and print the summary.'''
        print()
        print('=' * 62)
        print('  LIQUID BOTTLE -- STABILITY SWEEP')
        print('=' * 62)
        print(f'  Runs:              {nRuns:8d}')
        print(f'  Duration per run:  {duration:8.2f} s')
        print(f'  dt range:          (0, {(config or SimulationConfig()).maxFrameTime:.3f}] s')
        print()

        results = runStabilitySweep(nRuns, duration, seed, config=config)
        summary = summarizeSweep(results)

        print()
        print(f'  {"Run":>4}  {"Steps":>6}  {"Max|h|":>8}  {"Max|angle|":>10}  {"Drops":>5}  {"OK":>3}')
        print('  ' + '-' * 44)
        for r in results:
            print(
                f'  {r.runIndex:4d}  {r.nSteps:6d}  {r.maxHeight:8.4f}  '
                f'{r.maxAngleDeg:10.4f}  {r.maxDroplets:5d}  {"yes" if r.withinBound else "NO":>3}'
            )
        print()
        print('=' * 62)
        print(f'  Passed:            {summary["nPassed"]:4d} / {summary["nRuns"]}')
        print(f'  Worst |height|:    {summary["worstHeight"]:10.4f} px')
        print(f'  Worst |angle|:     {summary["worstAngleDeg"]:10.4f} deg')
        print('=' * 62)
        print()

        return {'results': results, 'summary': summary}


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    if args.config:
        config = SimulationConfig.fromJson(args.config)
    else:
        config = PRESETS[args.preset]()
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    runner = SloshRunner()

    if args.sweep is not None:
        runner.runSweep(args.sweep, args.duration or 10.0, config.seed, config=config)
        return

    params = LiveParameters(
        strength=args.strength,
        fill=args.fill,
        sensitivity=args.sensitivity,
        liquidColor=args.color,
    )
    runner.runSession(
        config,
        params,
        scenarioName=args.scenario,
        duration=args.duration,
        fps=args.fps,
        jitter=args.jitter,
        doExport=not args.no_export,
        exportDir=args.output_dir,
        doPlot=args.plot,
        doAudio=args.audio,
        doAnimate=args.animate,
    )


if __name__ == '__main__':
    main()
