# -- Liquid Bottle Animation Scene -- #

'''
Manim playback of an exported slosh session.

Loads frame data from a FrameExporter JSON file and redraws the
liquid body, surface line, and droplets each frame inside the
open-top container.

Usage:
    liquid-bottle --scenario shake --animate
    manim render -ql liquidBottle/animations/bottleScene.py LiquidBottleAnimation

Sean Bowman [10/18/2026]
'''

import os

import numpy as np
from manim import (
    Scene, Text, VGroup, Dot, Line, Polygon, VMobject,
    FadeIn, Write, Create,
    UP, DOWN, RIGHT,
    ManimColor,
    config as manimConfig,
)

from liquidBottle.animations.exportData import (
    EXPORT_PATH_ENV,
    SceneMapping,
    findLatestExport,
    loadExport,
)
from liquidBottle.animations.manimTheme import (
    BG_COLOR, BLUE, WHITE, CONTAINER_COLOR, SURFACE_COLOR, DROPLET_COLOR,
)


def createContainerWalls(mapping: SceneMapping, strokeWidth: float = 3.0) -> VGroup:
    '''Left wall, floor, and right wall of the open-top bottle.'''
    corners = mapping.toScene(
        [0.0, 0.0, mapping.width, mapping.width],
        [0.0, mapping.height, mapping.height, 0.0],
    )
    return VGroup(*[
        Line(start=corners[i], end=corners[i + 1], color=CONTAINER_COLOR, stroke_width=strokeWidth)
        for i in range(3)
    ])


def createDroplets(mapping: SceneMapping, droplets: list) -> VGroup:
    '''One dot per exported droplet, faded by remaining life.'''
    dots = VGroup()
    for x, y, vx, vy, radius, life in droplets:
        dots.add(Dot(
            point=mapping.toScene(x, y)[0],
            radius=max(0.015, radius * mapping.scale),
            color=DROPLET_COLOR,
            fill_opacity=0.4 + 0.5 * max(0.0, min(1.0, life)),
        ))
    return dots


class LiquidBottleAnimation(Scene):
    '''
    Animated liquid bottle session.

    Plays the export named by the LIQUID_BOTTLE_EXPORT environment
    variable, or the most recent export in liquidBottle/output.
    '''

    def construct(self):
        manimConfig.background_color = BG_COLOR

        jsonPath = os.environ.get(EXPORT_PATH_ENV) or findLatestExport(
            os.path.join(os.getcwd(), 'liquidBottle', 'output')
        )

        if jsonPath is None:
            errorText = Text(
                'No session data found.\n'
                'Run: liquid-bottle --scenario shake',
                font_size=28,
                color=WHITE,
            )
            self.play(Write(errorText))
            self.wait(3)
            return

        data = loadExport(jsonPath)
        frames = data['frames']
        simConfig = data['config']
        meta = data['meta']
        liquidColor = ManimColor(data['params'].get('liquidColor', '#2f8cff'))

        mapping = SceneMapping(simConfig['containerWidth'], simConfig['containerHeight'])

        ######################################################################
        # Title Card
        ######################################################################
        title = Text(
            'Liquid Bottle',
            font_size=34,
            color=WHITE,
        ).to_edge(UP, buff=0.3)

        subtitle = Text(
            f'{meta.get("scenario", "session")}  |  '
            f'{meta.get("nPoints", "?")} surface points  |  '
            f'{len(frames)} frames',
            font_size=18,
            color=BLUE,
        ).next_to(title, DOWN, buff=0.15)

        self.play(Write(title), run_time=0.6)
        self.play(FadeIn(subtitle), run_time=0.4)

        walls = createContainerWalls(mapping)
        self.play(Create(walls), run_time=0.5)

        ######################################################################
        # Initial frame
        ######################################################################
        first = frames[0]
        liquid = Polygon(
            *mapping.liquidOutline(first['surfaceY']),
            color=liquidColor, fill_color=liquidColor, fill_opacity=0.85, stroke_width=0,
        )
        surface = VMobject(color=SURFACE_COLOR, stroke_width=2.5)
        surface.set_points_as_corners(mapping.liquidOutline(first['surfaceY'])[1:-1])
        droplets = createDroplets(mapping, first['droplets'])
        self.play(FadeIn(liquid), FadeIn(surface), run_time=0.6)
        self.add(droplets)

        timeLabel = Text(
            f't = {first["time"]:.2f} s',
            font_size=20,
            color=WHITE,
        ).to_corner(DOWN + RIGHT, buff=0.5)
        self.add(timeLabel)

        ######################################################################
        # Animate frames
        ######################################################################
        frameDt = 1.0 / 30.0
        for frame in frames[1:]:
            outline = mapping.liquidOutline(frame['surfaceY'])
            liquid.set_points_as_corners(np.vstack([outline, outline[:1]]))
            surface.set_points_as_corners(outline[1:-1])

            self.remove(droplets)
            droplets = createDroplets(mapping, frame['droplets'])
            self.add(droplets)

            self.remove(timeLabel)
            timeLabel = Text(
                f't = {frame["time"]:.2f} s',
                font_size=20,
                color=WHITE,
            ).to_corner(DOWN + RIGHT, buff=0.5)
            self.add(timeLabel)

            self.wait(frameDt)

        self.wait(1.0)
