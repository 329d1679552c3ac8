# -- Animation Render Script -- #

'''
Renders the Manim bottle scene for an exported session.

Usage:
    python -m liquidBottle.animations.render --export liquidBottle/output/liquidBottle_shake_20261018_120000.json
    python -m liquidBottle.animations.render --quality medium

Sean Bowman [10/18/2026]
'''

import argparse
import os
import shutil
import subprocess
import sys

from liquidBottle.animations.exportData import EXPORT_PATH_ENV


######################################################################
# -- Scene Registry -- #
######################################################################

SCENES = {
    'bottle': {
        'file': os.path.join('liquidBottle', 'animations', 'bottleScene.py'),
        'class': 'LiquidBottleAnimation',
        'description': 'Liquid bottle slosh playback',
    },
}

QUALITY_FLAGS = {
    'low': '-ql',       # 480p, 15fps
    'medium': '-qm',    # 720p, 30fps
    'high': '-qh',      # 1080p, 60fps
    'fourk': '-qk',     # 4K, 60fps
}


######################################################################
# -- Helpers -- #
######################################################################

def _projectRoot() -> str:
    '''Directory holding the liquidBottle package.'''
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))


def buildRenderCommand(sceneName: str, quality: str = 'low') -> list[str]:
    '''Manim CLI invocation for a registered scene.'''
    if sceneName not in SCENES:
        raise ValueError(
            f'Unknown scene "{sceneName}". Available: {", ".join(SCENES)}'
        )
    sceneInfo = SCENES[sceneName]
    projectRoot = _projectRoot()
    return [
        sys.executable, '-m', 'manim', 'render',
        QUALITY_FLAGS.get(quality, '-ql'),
        '--media_dir', os.path.join(projectRoot, 'liquidBottle', 'media'),
        os.path.join(projectRoot, sceneInfo['file']),
        sceneInfo['class'],
    ]


def renderScene(sceneName: str = 'bottle', quality: str = 'low', exportPath: str | None = None) -> bool:
    '''
    Render a registered Manim scene.

    Parameters:
    -----------
    sceneName : str
        Key from SCENES
    quality : str
        Quality preset: low, medium, high, fourk
    exportPath : str | None
        Session JSON to play (defaults to the latest export)

    Returns:
    --------
    bool : True if rendering succeeded, False otherwise
    '''
    cmd = buildRenderCommand(sceneName, quality)

    if shutil.which('ffmpeg') is None:
        print('  Warning: ffmpeg not found. Video rendering may fail.')

    env = dict(os.environ)
    if exportPath is not None:
        env[EXPORT_PATH_ENV] = os.path.abspath(exportPath)

    print(f'\nRendering: {SCENES[sceneName]["description"]}')
    print(f'  Class:   {SCENES[sceneName]["class"]}')
    print(f'  Quality: {quality}')
    print()

    try:
        subprocess.run(cmd, cwd=_projectRoot(), env=env, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        print(f'\nFailed to render {sceneName}: {e}')
        return False

    print(f'\nCompleted: {sceneName}')
    return True


######################################################################
# -- Main -- #
######################################################################

def main() -> None:
    '''CLI entry point for rendering the bottle scene.'''
    parser = argparse.ArgumentParser(description='Render the liquid bottle Manim scene')
    parser.add_argument(
        '--scene', '-s', choices=list(SCENES.keys()), default='bottle',
        help='Scene to render (default: bottle)',
    )
    parser.add_argument(
        '--quality', '-q', choices=list(QUALITY_FLAGS.keys()), default='low',
        help='Render quality (default: low = 480p)',
    )
    parser.add_argument(
        '--export', '-e', type=str, default=None,
        help='Session JSON to play (default: latest in liquidBottle/output)',
    )
    args = parser.parse_args()

    renderScene(args.scene, args.quality, args.export)


if __name__ == '__main__':
    main()
