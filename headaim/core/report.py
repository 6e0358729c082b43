from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple

from headaim.core.geometry import Vector3

DEGENERATE_GEOMETRY = "DegenerateGeometry"
OUT_OF_RANGE = "OutOfRangeChannel"
INPUT_UNAVAILABLE = "InputUnavailable"
SINK_ERROR = "SinkError"


class ChannelFrame(NamedTuple):
    """What the output sink receives for one fixture in one tick."""

    fixture_id: str
    pan_channel: int
    pan_value: float
    tilt_channel: int
    tilt_value: float
    pan_max: float
    tilt_max: float

    @classmethod
    def from_fixture(cls, fixture) -> "ChannelFrame":
        return cls(
            fixture.name,
            fixture.pan.id, fixture.pan.value,
            fixture.tilt.id, fixture.tilt.value,
            fixture.pan.max_value, fixture.tilt.max_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self._asdict()


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    fixture: Optional[str] = None
    channel: Optional[int] = None
    value: Optional[float] = None

    @classmethod
    def from_error(cls, error: Exception, fixture: Optional[str] = None) -> "Diagnostic":
        return cls(
            kind=type(error).__name__,
            message=str(error),
            fixture=fixture if fixture is not None else getattr(error, "fixture", None),
            channel=getattr(error, "channel", None),
            value=getattr(error, "value", None),
        )

    @property
    def key(self):
        return (self.kind, self.fixture, self.channel)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "fixture": self.fixture, "channel": self.channel, "value": self.value}


@dataclass(frozen=True)
class TickReport:
    seq: int
    ts_ms: int
    target: Vector3
    frames: Tuple[ChannelFrame, ...] = field(default_factory=tuple)
    diagnostics: Tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def failed_fixtures(self):
        return sorted({d.fixture for d in self.diagnostics if d.fixture is not None})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seq": self.seq,
            "ts_ms": self.ts_ms,
            "target": self.target.as_dict(),
            "frames": [f.to_dict() for f in self.frames],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
