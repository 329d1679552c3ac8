# -- Bottle Animations Package -- #

'''
Manim playback of exported slosh sessions.

The scene module needs the optional 'animation' extra (manim);
exportData and render only need the standard install.

Sean Bowman [10/18/2026]
'''
