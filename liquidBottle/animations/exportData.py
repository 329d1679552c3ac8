# -- Exported Session Loading -- #

'''
Locates and loads FrameExporter JSON files and maps bottle screen
coordinates (pixels, y downward) into Manim scene units (y upward,
centered on the origin).

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import json
import os

import numpy as np


EXPORT_PREFIX = 'liquidBottle_'

# Environment variable the renderer uses to pin a specific export
EXPORT_PATH_ENV = 'LIQUID_BOTTLE_EXPORT'


def findLatestExport(dataDir: str) -> str | None:
    '''
    Find the most recently exported session JSON file.

    Parameters:
    -----------
    dataDir : str
        Directory to search for JSON exports

    Returns:
    --------
    str | None : Path to the most recent file, or None
    '''
    if not os.path.isdir(dataDir):
        return None

    jsonFiles = [
        os.path.join(dataDir, f)
        for f in os.listdir(dataDir)
        if f.startswith(EXPORT_PREFIX) and f.endswith('.json')
    ]

    if not jsonFiles:
        return None

    jsonFiles.sort(key=lambda f: os.path.getmtime(f), reverse=True)
    return jsonFiles[0]


def loadExport(jsonPath: str) -> dict:
    '''Read an exported session and check it has frames.'''
    with open(jsonPath, 'r') as f:
        data = json.load(f)

    if data.get('meta', {}).get('type') != 'liquidBottle':
        raise ValueError(f'{jsonPath} is not a liquidBottle export')
    if not data.get('frames'):
        raise ValueError(f'{jsonPath} contains no frames')
    return data


class SceneMapping:
    '''
    Screen-to-scene coordinate transform for one container size.

    Parameters:
    -----------
    containerWidth, containerHeight : float
        Container size [px]
    targetHeight : float
        Container height in Manim units
    '''

    def __init__(self, containerWidth: float, containerHeight: float, targetHeight: float = 6.0) -> None:
        self.width = containerWidth
        self.height = containerHeight
        self.scale = targetHeight / containerHeight

    def toScene(self, x, y) -> np.ndarray:
        '''Map screen points to (n, 3) scene points.'''
        x = np.atleast_1d(np.asarray(x, dtype=float))
        y = np.atleast_1d(np.asarray(y, dtype=float))
        sx = (x - self.width / 2.0) * self.scale
        sy = (self.height / 2.0 - y) * self.scale
        return np.column_stack([sx, sy, np.zeros_like(sx)])

    def liquidOutline(self, surfaceY: list[float]) -> np.ndarray:
        '''Scene-space polygon of the liquid body under a surface curve.'''
        n = len(surfaceY)
        xs = np.linspace(0.0, self.width, n)
        x = np.concatenate([[0.0], xs, [self.width]])
        y = np.concatenate([[self.height], np.asarray(surfaceY, dtype=float), [self.height]])
        return self.toScene(x, y)
