# -- Session Frame Exporter -- #

'''
Exports slosh simulation frames as JSON for visualization.

Collects FrameSnapshots during a session and writes them to a JSON
file that the Manim bottle scene can play back. Each frame stores
the screen-space surface curve, raw surface heights, droplets,
impacts, and the container attitude; a compact per-step history
carries the scalar diagnostics.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import json
import os
from datetime import datetime

import numpy as np

from liquidBottle.core.protocols import FrameSnapshot, LiveParameters, SimulationConfig


class FrameExporter:
    '''
    Collects and exports session frame data as JSON.

    Usage:
        exporter = FrameExporter()
        # During the session loop:
        exporter.addFrame(snapshot)
        # After the session:
        exporter.export(config, params, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "liquidBottle", "nFrames": 120, "created": "...", ... },
        "config": { "nPoints": 64, "containerWidth": 320.0, ... },
        "params": { "strength": 60.0, "fill": 55.0, ... },
        "frames": [
            {
                "time": 0.0,
                "surfaceY": [y0, y1, ...],
                "heights": [h0, h1, ...],
                "angleDeg": 0.0,
                "levelOffset": 0.0,
                "activity": 0.0,
                "droplets": [[x, y, vx, vy, r, life], ...],
                "impacts": [[fraction, power], ...]
            },
            ...
        ],
        "history": {
            "times": [...], "angleDeg": [...], "kinetic": [...],
            "potential": [...], "total": [...], "maxHeight": [...],
            "nDroplets": [...], "nImpacts": [...]
        }
    }
    '''

    def __init__(self, frameStride: int = 1) -> None:
        if frameStride < 1:
            raise ValueError(f'frameStride must be >= 1, got {frameStride}')
        self._frameStride = frameStride
        self._nSeen: int = 0
        self._frames: list[dict] = []
        self._history: dict[str, list[float]] = {
            'times': [],
            'angleDeg': [],
            'kinetic': [],
            'potential': [],
            'total': [],
            'maxHeight': [],
            'nDroplets': [],
            'nImpacts': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def history(self) -> dict[str, list[float]]:
        return self._history

    def addFrame(self, snapshot: FrameSnapshot) -> None:
        '''
        Record a completed frame.

        History is kept for every call; full frame data only for
        every frameStride-th call.

        Parameters:
        -----------
        snapshot : FrameSnapshot
            Completed frame from FrameStepper.step()
        '''
        state = snapshot.state

        self._history['times'].append(round(state.time, 6))
        self._history['angleDeg'].append(round(state.angleDeg, 6))
        self._history['kinetic'].append(round(state.kineticEnergy, 6))
        self._history['potential'].append(round(state.potentialEnergy, 6))
        self._history['total'].append(round(state.totalEnergy, 6))
        self._history['maxHeight'].append(round(state.maxHeight, 6))
        self._history['nDroplets'].append(state.nDroplets)
        self._history['nImpacts'].append(state.nImpacts)

        keep = self._nSeen % self._frameStride == 0
        self._nSeen += 1
        if not keep:
            return

        frame = {
            'time': round(state.time, 6),
            'surfaceY': np.round(snapshot.surfaceY, 4).tolist(),
            'heights': np.round(snapshot.heights, 6).tolist(),
            'angleDeg': round(snapshot.tilt.angleDeg, 6),
            'levelOffset': round(snapshot.tilt.levelOffset, 6),
            'activity': round(snapshot.activity, 6),
            'droplets': [
                [round(d.x, 3), round(d.y, 3), round(d.vx, 3), round(d.vy, 3),
                 round(d.radius, 3), round(d.life, 4)]
                for d in snapshot.droplets
            ],
            'impacts': [
                [round(e.horizontalFraction, 6), round(e.power, 4)]
                for e in snapshot.impacts
            ],
        }
        self._frames.append(frame)

    def export(
        self,
        config: SimulationConfig,
        params: LiveParameters,
        outputDir: str = 'liquidBottle/output',
        scenarioName: str = 'session',
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        config : SimulationConfig
            Session configuration for metadata
        params : LiveParameters
            Live controls at the end of the session
        outputDir : str
            Output directory path
        scenarioName : str
            Scenario name for the filename

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        if not self._frames:
            raise ValueError('No frames collected; nothing to export')

        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'liquidBottle_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        output = {
            'meta': {
                'type': 'liquidBottle',
                'scenario': scenarioName,
                'nFrames': len(self._frames),
                'nSteps': len(self._history['times']),
                'frameStride': self._frameStride,
                'nPoints': config.nPoints,
                'created': datetime.now().isoformat(),
            },
            'config': config.toDict(),
            'params': params.toDict(),
            'frames': self._frames,
            'history': self._history,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
