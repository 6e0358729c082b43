import threading
import time
import logging
from typing import Callable, Optional

from headaim.core.geometry import ZERO, Vector3

logger = logging.getLogger("headaim.input")

# stick layout: right stick moves the target in the room plane, left stick Y raises/lowers it
RIGHT_STICK_X = "RightStickX"
RIGHT_STICK_Y = "RightStickY"
LEFT_STICK_Y = "LeftStickY"

AXIS_SCALE = 1.0 / 100.0


class InputSource:
    """Pull-based source, asked for one sample per tick."""

    def sample(self) -> Vector3:
        raise NotImplementedError


class ZeroInput(InputSource):
    def sample(self) -> Vector3:
        return ZERO


class GamepadAxesInput(InputSource):
    """Samples stick axes through read_axis(name) -> Optional[float].

    read_axis returning None for any axis means the pad is gone and
    the tick gets a zero sample.
    """

    def __init__(self, read_axis: Callable[[str], Optional[float]], scale: float = AXIS_SCALE):
        self.read_axis = read_axis
        self.scale = scale

    def sample(self) -> Vector3:
        x = self.read_axis(RIGHT_STICK_X)
        y = self.read_axis(RIGHT_STICK_Y)
        z = self.read_axis(LEFT_STICK_Y)
        if x is None or y is None or z is None:
            return ZERO
        return Vector3(x * self.scale, y * self.scale, z * self.scale)


class LatestSampleInput(InputSource):
    """Thread-safe holder for normalized axis samples pushed from MQTT or HTTP.

    With hold=True the last sample repeats every tick (a held stick) until it is
    replaced, reset, or older than max_age_ms. With hold=False it is consumed once.
    """

    def __init__(self, hold: bool = True, max_age_ms: Optional[int] = 500, scale: float = AXIS_SCALE):
        self.hold = hold
        self.scale = scale
        self.max_age_ms = max_age_ms
        self._lock = threading.RLock()
        self._sample: Vector3 = ZERO
        self._ts_ms = 0

    def push(self, sample, ts_ms: Optional[int] = None):
        value = Vector3.of(sample)
        with self._lock:
            self._sample = value
            self._ts_ms = ts_ms or int(time.time() * 1000)

    def reset(self):
        with self._lock:
            self._sample = ZERO
            self._ts_ms = 0

    def sample(self) -> Vector3:
        now = int(time.time() * 1000)
        with self._lock:
            value = self._sample
            if self.max_age_ms is not None and self._ts_ms and now - self._ts_ms > self.max_age_ms:
                # publisher went quiet, treat as released stick
                value = ZERO
                self._sample = ZERO
            if not self.hold:
                self._sample = ZERO
            return Vector3(value.x * self.scale, value.y * self.scale, value.z * self.scale)
