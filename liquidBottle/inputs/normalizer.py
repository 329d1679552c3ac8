# -- Steering Input Normalizer -- #

'''
Reduces pointer, device-orientation, and keyboard input to one
normalized steering vector in [-1, 1]^2.

Control modes:
    pointer  -- position inside the container; drifts back to center
                (x0.94 per frame) once idle for more than 180 ms
    device   -- gamma/35, beta/45 from device orientation, enabled by
                a one-shot permission negotiation
    keyboard -- arrow keys / WASD, smoothed 18% toward the target
                each frame

The simulation core only calls resolve(); event handlers update
the normalizer between frames.

Sean Bowman [10/18/2026]
'''

from __future__ import annotations

import time
from typing import Callable, Literal

from liquidBottle.core.protocols import SteeringVector
from liquidBottle.utilsLB import clamp, finiteOrZero


ControlMode = Literal['pointer', 'device', 'keyboard']

#--------------------------------------------------------------------#
# -- Input Tuning -- #
#--------------------------------------------------------------------#

# Pointer idle time before drifting back to center [ms]
pointerIdleMs: float = 180.0

# Per-frame shrink factor while idle
pointerIdleDecay: float = 0.94

# Device orientation full-scale angles [deg]
gammaFullScale: float = 35.0
betaFullScale: float = 45.0

# Keyboard smoothing per frame
keyboardSmoothing: float = 0.18

LEFT_KEYS = frozenset({'ArrowLeft', 'a', 'A'})
RIGHT_KEYS = frozenset({'ArrowRight', 'd', 'D'})
UP_KEYS = frozenset({'ArrowUp', 'w', 'W'})
DOWN_KEYS = frozenset({'ArrowDown', 's', 'S'})

MODE_LABELS = {
    'pointer': 'Mode: Pointer',
    'device': 'Mode: Device Tilt',
    'keyboard': 'Mode: Keyboard Tilt',
}


def _monotonicMs() -> float:
    return time.monotonic() * 1000.0


class InputNormalizer:
    '''
    Per-session input state.

    Parameters:
    -----------
    clock : Callable[[], float] | None
        Millisecond clock used for pointer idle detection
    '''

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or _monotonicMs
        self.mode: ControlMode = 'pointer'
        self.deviceTiltEnabled: bool = False

        self._x: float = 0.0
        self._y: float = 0.0
        self._lastPointerMs: float = self._clock()

        self._keys: set[str] = set()
        self._kx: float = 0.0
        self._ky: float = 0.0

    ######################################################################
    # -- Mode Control -- #
    ######################################################################

    def setMode(self, mode: ControlMode) -> None:
        if mode not in MODE_LABELS:
            raise ValueError(f'Unknown control mode "{mode}"')
        self.mode = mode

    @property
    def modeLabel(self) -> str:
        return MODE_LABELS[self.mode]

    def toggleKeyboardMode(self) -> ControlMode:
        '''Flip between keyboard and pointer control.'''
        self.setMode('pointer' if self.mode == 'keyboard' else 'keyboard')
        return self.mode

    def enableDeviceTilt(self, requestPermission: Callable[[], str] | None = None) -> bool:
        '''
        One-shot device-orientation capability negotiation.

        On platforms that gate orientation events, requestPermission
        is called once and must return 'granted'. A PermissionError
        counts as a refusal.

        Parameters:
        -----------
        requestPermission : Callable[[], str] | None
            Platform permission prompt; None means no prompt is needed

        Returns:
        --------
        bool : True when device tilt is now the active input
        '''
        if requestPermission is not None:
            try:
                result = requestPermission()
            except PermissionError:
                return False
            if result != 'granted':
                return False

        self.deviceTiltEnabled = True
        self.setMode('device')
        return True

    ######################################################################
    # -- Event Handlers -- #
    ######################################################################

    def pointerDown(self, px: float, py: float, width: float, height: float) -> None:
        '''Pointer pressed inside the container; switches to pointer mode.'''
        self.setMode('pointer')
        self._setFromPointer(px, py, width, height)
        self._lastPointerMs = self._clock()

    def pointerMove(self, px: float, py: float, width: float, height: float) -> None:
        if self.mode != 'pointer':
            return
        self._setFromPointer(px, py, width, height)
        self._lastPointerMs = self._clock()

    def _setFromPointer(self, px: float, py: float, width: float, height: float) -> None:
        if width <= 0.0 or height <= 0.0:
            return
        self._x = (px / width) * 2.0 - 1.0
        self._y = (py / height) * 2.0 - 1.0

    def deviceOrientation(self, gamma: float | None, beta: float | None) -> None:
        '''Orientation reading [deg]; ignored unless device tilt is active.'''
        if not self.deviceTiltEnabled or self.mode != 'device':
            return
        self._x = clamp(finiteOrZero(gamma) / gammaFullScale, -1.0, 1.0)
        self._y = clamp(finiteOrZero(beta) / betaFullScale, -1.0, 1.0)

    def keyDown(self, key: str) -> None:
        self._keys.add(key)

    def keyUp(self, key: str) -> None:
        self._keys.discard(key)

    ######################################################################
    # -- Per-Frame Resolution -- #
    ######################################################################

    def _keyboardTarget(self) -> tuple[float, float]:
        keys = self._keys
        left = bool(keys & LEFT_KEYS)
        right = bool(keys & RIGHT_KEYS)
        up = bool(keys & UP_KEYS)
        down = bool(keys & DOWN_KEYS)
        return (float(right) - float(left), float(down) - float(up))

    def resolve(self) -> SteeringVector:
        '''
        Steering vector for the next frame.

        Applies pointer idle decay and keyboard smoothing once per call,
        so call exactly once per frame.
        '''
        if self.mode == 'pointer' and self._clock() - self._lastPointerMs > pointerIdleMs:
            self._x *= pointerIdleDecay
            self._y *= pointerIdleDecay

        tx, ty = self._keyboardTarget()
        self._kx += (tx - self._kx) * keyboardSmoothing
        self._ky += (ty - self._ky) * keyboardSmoothing

        if self.mode == 'keyboard':
            self._x = self._kx
            self._y = self._ky

        return SteeringVector(self._x, self._y).clamped()
