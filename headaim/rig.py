"""Rig file loading: moving heads, room bounds, home position and speed.

The file uses camelCase keys::

    movingHeads:
      - position: [0, 0, 3]
        pan:  {channel: 1, value: 0, maxValue: 270}
        tilt: {channel: 2, value: 0, maxValue: 135}
    room: [10, 10, 4]
    home: [5, 5, 0]
    speed: 1.0

Anything malformed raises ConfigurationError; no partial World is built.
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from headaim.core.errors import ConfigurationError
from headaim.core.fixture import Channel, MovingHead
from headaim.core.target import TargetController
from headaim.core.world import World

logger = logging.getLogger("headaim.config")

Vec3 = Tuple[float, float, float]


def _coerce_vec3(value: Any) -> Any:
    if isinstance(value, dict):
        missing = [k for k in ("x", "y", "z") if k not in value]
        if missing:
            raise ValueError(f"vector is missing {', '.join(missing)}")
        return (value["x"], value["y"], value["z"])
    return value


class ChannelConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    channel: int = Field(ge=0, le=255)
    value: float = 0.0
    max_value: float = Field(alias="maxValue", gt=0)


class MovingHeadConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    name: Optional[str] = None
    position: Vec3
    pan: ChannelConfig
    tilt: ChannelConfig

    @field_validator("position", mode="before")
    @classmethod
    def coerce_position(cls, value):
        return _coerce_vec3(value)


class RigConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    moving_heads: List[MovingHeadConfig] = Field(alias="movingHeads", min_length=1)
    room: Vec3
    home: Vec3
    speed: float = Field(ge=0)
    room_min: Vec3 = Field(default=(0.0, 0.0, 0.0), alias="roomMin")

    @field_validator("room", "home", "room_min", mode="before")
    @classmethod
    def coerce_vectors(cls, value):
        return _coerce_vec3(value)

    @model_validator(mode="after")
    def check_rig(self) -> "RigConfig":
        if any(v < 0 for v in self.room):
            raise ValueError(f"room extents must be >= 0, got {self.room}")
        if any(lo > hi for lo, hi in zip(self.room_min, self.room)):
            raise ValueError(f"roomMin {self.room_min} exceeds room {self.room}")

        seen = {}
        for idx, head in enumerate(self.moving_heads):
            if head.name is None:
                head.name = f"head-{idx}"
            for role, ch in (("pan", head.pan), ("tilt", head.tilt)):
                owner = seen.get(ch.channel)
                if owner is not None:
                    raise ValueError(f"channel {ch.channel} used by both {owner} and {head.name}.{role}")
                seen[ch.channel] = f"{head.name}.{role}"

        names = [h.name for h in self.moving_heads]
        if len(set(names)) != len(names):
            raise ValueError(f"moving head names must be unique: {names}")
        return self


def detect_format(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    raise ConfigurationError(f"Unsupported config format: {suffix or '(none)'}")


def parse_rig(data: Any) -> RigConfig:
    if not isinstance(data, dict):
        raise ConfigurationError(f"rig config must be a mapping, got {type(data).__name__}")
    try:
        return RigConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid rig config: {e}") from e


def load_rig(path) -> RigConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file does not exist: {path}")
    fmt = detect_format(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            if fmt == "json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid {fmt.upper()} in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    rig = parse_rig(data if data is not None else {})
    logger.info("Loaded rig %s: %d moving heads, room %s", path, len(rig.moving_heads), rig.room)
    return rig


def build_world(rig: RigConfig) -> World:
    fixtures = [
        MovingHead(
            name=h.name,
            position=h.position,
            pan=Channel(h.pan.channel, h.pan.max_value, h.pan.value),
            tilt=Channel(h.tilt.channel, h.tilt.max_value, h.tilt.value),
        )
        for h in rig.moving_heads
    ]
    target = TargetController(upper=rig.room, home=rig.home, speed=rig.speed, lower=rig.room_min)
    return World(target, fixtures)


def load_world(path) -> World:
    return build_world(load_rig(path))
