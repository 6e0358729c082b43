from typing import Any, Dict, List, Optional, Sequence

from headaim.core.fixture import MovingHead
from headaim.core.report import TickReport
from headaim.core.target import TargetController


class World:
    """The target and the fixtures driven by one targeting loop."""

    def __init__(self, target: TargetController, fixtures: Sequence[MovingHead]):
        names = [f.name for f in fixtures]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate fixture names: {names}")
        self.target = target
        self._fixtures: List[MovingHead] = list(fixtures)

    @property
    def fixtures(self) -> List[MovingHead]:
        return list(self._fixtures)

    def fixture(self, name: str) -> Optional[MovingHead]:
        for f in self._fixtures:
            if f.name == name:
                return f
        return None

    def snapshot(self, report: Optional[TickReport] = None) -> Dict[str, Any]:
        """Plain copies of the target and fixtures.

        With a report, position and channel values come from that tick so the
        target and every head's angles agree.
        """
        position = report.target if report is not None else self.target.snapshot()
        frames = {f.fixture_id: f for f in report.frames} if report is not None else {}
        fixtures = []
        for f in self._fixtures:
            d = f.to_dict()
            frame = frames.get(f.name)
            if frame is not None:
                d["pan"]["value"] = frame.pan_value
                d["tilt"]["value"] = frame.tilt_value
            fixtures.append(d)
        return {
            "target": {
                "position": position.as_dict(),
                "lower": self.target.lower.as_dict(),
                "upper": self.target.upper.as_dict(),
                "speed": self.target.speed,
            },
            "fixtures": fixtures,
        }
