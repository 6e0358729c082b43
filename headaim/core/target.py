import logging
import threading
from typing import Optional

import numpy as np

from headaim.core.geometry import Vector3, as_array

logger = logging.getLogger("headaim.target")


class TargetController:
    """Thread-safe owner of the single target point.

    The position is kept inside the box [lower, upper] after every mutation.

    Usage:
      integrate(sample) -> Vector3
      snapshot() -> Vector3
    """

    def __init__(self, upper, home=None, speed: float = 1.0, lower=None):
        self._lower = as_array(lower) if lower is not None else np.zeros(3)
        self._upper = as_array(upper)
        if not (np.all(np.isfinite(self._lower)) and np.all(np.isfinite(self._upper))):
            raise ValueError("target bounds must be finite")
        if np.any(self._upper < self._lower):
            raise ValueError(f"upper bound {self._upper.tolist()} below lower bound {self._lower.tolist()}")
        if speed < 0:
            raise ValueError("speed must be >= 0")
        self.speed = float(speed)
        self._lock = threading.RLock()
        self._home = self._clamp(as_array(home) if home is not None else self._lower.copy())
        self._position = self._home.copy()

    def _clamp(self, pos: np.ndarray) -> np.ndarray:
        return np.minimum(np.maximum(pos, self._lower), self._upper)

    @property
    def lower(self) -> Vector3:
        return Vector3.from_array(self._lower)

    @property
    def upper(self) -> Vector3:
        return Vector3.from_array(self._upper)

    @property
    def home_position(self) -> Vector3:
        return Vector3.from_array(self._home)

    def snapshot(self) -> Vector3:
        with self._lock:
            return Vector3.from_array(self._position)

    def integrate(self, sample) -> Vector3:
        """Apply one velocity sample scaled by speed, then clamp per axis."""
        delta = as_array(sample)
        if not np.all(np.isfinite(delta)):
            raise ValueError(f"non-finite input sample {delta.tolist()}")
        with self._lock:
            self._position = self._clamp(self._position + delta * self.speed)
            return Vector3.from_array(self._position)

    def move_to(self, position) -> Vector3:
        pos = as_array(position)
        if not np.all(np.isfinite(pos)):
            raise ValueError(f"non-finite position {pos.tolist()}")
        with self._lock:
            self._position = self._clamp(pos)
            return Vector3.from_array(self._position)

    def home(self) -> Vector3:
        with self._lock:
            self._position = self._home.copy()
            logger.info("Target returned home %s", self.home_position)
            return Vector3.from_array(self._position)

    def contains(self, position: Optional[Vector3] = None) -> bool:
        pos = as_array(position) if position is not None else as_array(self.snapshot())
        return bool(np.all(pos >= self._lower) and np.all(pos <= self._upper))
# Target integrator
