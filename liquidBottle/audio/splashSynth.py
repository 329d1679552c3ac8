# -- Splash Sound Synthesis -- #

'''
Short filtered noise bursts for droplet impacts.

Each impact becomes a 90 ms white-noise burst with a decaying
envelope, band-passed around 850 Hz and low-passed at 1600 Hz,
then shaped by an exponential attack/release gain. Voices are
placed on a timeline at the synth's current time so a session
can be mixed down and written as a WAV file.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import signal
from scipy.io import wavfile

from liquidBottle.utilsLB import clamp


#--------------------------------------------------------------------#
# -- Splash Tuning -- #
#--------------------------------------------------------------------#

defaultSampleRate: int = 44100

# Burst length [s] and noise envelope exponent
burstDuration: float = 0.09
noiseEnvelopeExponent: float = 2.2

# Band-pass centre [Hz] and quality, low-pass corner [Hz]
bandPassHz: float = 850.0
bandPassQ: float = 0.7
lowPassHz: float = 1600.0

# Gain ramp: floor -> peak in attackTime, back to floor by burstDuration
gainFloor: float = 1.0e-4
attackTime: float = 0.012
peakVolume: float = 0.006


@dataclass
class SplashVoice:
    '''One rendered splash placed on the session timeline.'''

    startTime: float
    power: float
    samples: np.ndarray


class SplashSynth:
    '''
    Audio collaborator: one splash voice per playImpact() call.

    Silent until enabled, matching a user-gated sound toggle.

    Parameters:
    -----------
    sampleRate : int
        Output sample rate [Hz]
    seed : int | None
        Seed for the noise generator
    '''

    def __init__(self, sampleRate: int = defaultSampleRate, seed: int | None = None) -> None:
        self._sampleRate = sampleRate
        self._rng = np.random.default_rng(seed)
        self.enabled: bool = False
        self.currentTime: float = 0.0
        self._voices: list[SplashVoice] = []

        self._bandB, self._bandA = signal.iirpeak(bandPassHz, bandPassQ, fs=sampleRate)
        self._lowB, self._lowA = signal.butter(2, lowPassHz, btype='low', fs=sampleRate)

    @property
    def sampleRate(self) -> int:
        return self._sampleRate

    @property
    def voices(self) -> list[SplashVoice]:
        return self._voices

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    ######################################################################
    # -- Synthesis -- #
    ######################################################################

    @staticmethod
    def volumeFor(power: float) -> float:
        '''Peak gain for an impact power.'''
        return peakVolume * clamp(power / 3.0, 0.35, 1.0)

    def gainEnvelope(self, power: float) -> np.ndarray:
        '''Exponential attack/release gain curve for one burst.'''
        n = int(self._sampleRate * burstDuration)
        t = np.arange(n) / self._sampleRate
        vol = self.volumeFor(power)

        attack = gainFloor * (vol / gainFloor) ** (t / attackTime)
        releaseFraction = (t - attackTime) / (burstDuration - attackTime)
        release = vol * (gainFloor / vol) ** releaseFraction
        return np.where(t < attackTime, attack, release)

    def synthesize(self, power: float) -> np.ndarray:
        '''
        Render one splash burst.

        Parameters:
        -----------
        power : float
            Impact power (0.6 - 4.0 in practice)

        Returns:
        --------
        np.ndarray : Mono samples, shape (sampleRate * 0.09,)
        '''
        n = int(self._sampleRate * burstDuration)
        envelope = (1.0 - np.arange(n) / n) ** noiseEnvelopeExponent
        noise = (self._rng.random(n) * 2.0 - 1.0) * envelope

        filtered = signal.lfilter(self._bandB, self._bandA, noise)
        filtered = signal.lfilter(self._lowB, self._lowA, filtered)
        return filtered * self.gainEnvelope(power)

    def playImpact(self, power: float) -> None:
        '''Queue a splash at currentTime; ignored while disabled.'''
        if not self.enabled:
            return
        self._voices.append(SplashVoice(
            startTime=self.currentTime,
            power=power,
            samples=self.synthesize(power),
        ))

    ######################################################################
    # -- Mixdown and Export -- #
    ######################################################################

    def mixdown(self, duration: float | None = None) -> np.ndarray:
        '''
        Sum every voice onto one timeline.

        Parameters:
        -----------
        duration : float | None
            Track length [s]; defaults to the end of the last voice

        Returns:
        --------
        np.ndarray : Mono float samples
        '''
        burstSamples = int(self._sampleRate * burstDuration)
        if duration is None:
            lastStart = max((v.startTime for v in self._voices), default=0.0)
            duration = lastStart + burstDuration
        nSamples = max(int(np.ceil(duration * self._sampleRate)), burstSamples)

        track = np.zeros(nSamples)
        for voice in self._voices:
            start = int(round(voice.startTime * self._sampleRate))
            if start >= nSamples:
                continue
            end = min(nSamples, start + len(voice.samples))
            track[start:end] += voice.samples[:end - start]
        return track

    def writeWav(self, path: str, duration: float | None = None) -> str:
        '''
        Write the mixdown as 16-bit PCM, normalized to avoid clipping.

        Returns:
        --------
        str : Path written
        '''
        track = self.mixdown(duration)
        peak = float(np.max(np.abs(track))) if len(track) else 0.0
        if peak > 0.0:
            track = track / peak * 0.9
        pcm = np.round(track * 32767.0).astype(np.int16)
        wavfile.write(path, self._sampleRate, pcm)
        return path

    def clear(self) -> None:
        self._voices = []
