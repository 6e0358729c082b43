from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np


# X, Y, Z with X being left/right, Y being forward/backward, Z being up/down
@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value) -> "Vector3":
        if isinstance(value, Vector3):
            return value
        if isinstance(value, dict):
            return cls(float(value.get('x', 0.0)), float(value.get('y', 0.0)), float(value.get('z', 0.0)))
        x, y, z = value
        return cls(float(x), float(y), float(z))

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in arr)
        return cls(x, y, z)

    def as_array(self) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=float)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_dict(self):
        return {"x": self.x, "y": self.y, "z": self.z}

    def __iter__(self):
        return iter(self.as_tuple())

    def __str__(self):
        return f"[{self.x:.3f}, {self.y:.3f}, {self.z:.3f}]"


ZERO = Vector3()


def as_array(value) -> np.ndarray:
    if isinstance(value, np.ndarray):
        return value.astype(float)
    return Vector3.of(value).as_array()
# Vector helpers
