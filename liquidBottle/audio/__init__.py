# -- Audio Package -- #

'''
Splash sound synthesis for droplet impacts.

Sean Bowman [10/18/2026]
'''

from liquidBottle.audio.splashSynth import SplashSynth, SplashVoice
