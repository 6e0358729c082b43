import json
import math
from typing import Any, Optional, Sequence

from headaim.core.geometry import Vector3
from headaim.core.report import ChannelFrame


def parse_json_payload(payload_bytes: bytes):
    try:
        return json.loads(payload_bytes.decode('utf-8'))
    except (UnicodeDecodeError, ValueError):
        return None


def parse_sample(payload: Any) -> Optional[Vector3]:
    """Accepts {"x":..,"y":..,"z":..} or [x, y, z]; missing axes count as 0."""
    try:
        if isinstance(payload, dict):
            sample = Vector3(float(payload.get('x', 0.0)), float(payload.get('y', 0.0)), float(payload.get('z', 0.0)))
        elif isinstance(payload, (list, tuple)) and len(payload) == 3:
            sample = Vector3.of(payload)
        else:
            return None
    except (TypeError, ValueError):
        return None
    if not all(math.isfinite(v) for v in sample):
        return None
    return sample


def frames_payload(seq: int, frames: Sequence[ChannelFrame]) -> str:
    return json.dumps({
        "seq": seq,
        "fixtures": [
            {
                "id": f.fixture_id,
                "pan": {"channel": f.pan_channel, "value": f.pan_value},
                "tilt": {"channel": f.tilt_channel, "value": f.tilt_value},
            }
            for f in frames
        ],
    })
# MQTT payload schemas
