from typing import Any, Dict, Optional, Tuple

from headaim.core.errors import OutOfRangeChannel
from headaim.core.geometry import Vector3
from headaim.core.solver import solve_pan_tilt


class Channel:
    """One hardware motor channel. The id is fixed once created."""

    def __init__(self, id: int, max_value: float, value: float = 0.0):
        if not 0 <= int(id) <= 255:
            raise ValueError(f"channel id {id} outside 0..255")
        self._id = int(id)
        self.max_value = float(max_value)
        self.value = float(value)

    @property
    def id(self) -> int:
        return self._id

    def in_range(self) -> bool:
        return abs(self.value) <= self.max_value

    def check(self, fixture: str) -> Optional[OutOfRangeChannel]:
        if self.in_range():
            return None
        return OutOfRangeChannel(fixture, self._id, self.value, self.max_value)

    def to_dict(self) -> Dict[str, Any]:
        return {"channel": self._id, "value": self.value, "max_value": self.max_value}

    def __repr__(self):
        return f"Channel(id={self._id}, value={self.value!r}, max_value={self.max_value!r})"


class MovingHead:
    def __init__(self, name: str, position, pan: Channel, tilt: Channel):
        self.name = name
        self._position = Vector3.of(position)
        self.pan = pan
        self.tilt = tilt

    @property
    def position(self) -> Vector3:
        return self._position

    def aim(self, target) -> Tuple[float, float]:
        # raises DegenerateGeometry, channels untouched
        return solve_pan_tilt(self._position, target)

    def point_to(self, target) -> Tuple[float, float]:
        pan, tilt = self.aim(target)
        self.pan.value = pan
        self.tilt.value = tilt
        return pan, tilt

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": self._position.as_dict(),
            "pan": self.pan.to_dict(),
            "tilt": self.tilt.to_dict(),
        }

    def __repr__(self):
        return f"MovingHead(name={self.name!r}, position={self._position}, pan={self.pan!r}, tilt={self.tilt!r})"
