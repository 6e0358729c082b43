from typing import Sequence

from headaim.core.report import ChannelFrame

UNIVERSE_SIZE = 512


def slot_for_channel(channel_id: int) -> int:
    # hardware channel ids are 0-based, DMX slots start at 1
    return int(channel_id) + 1


def deg_to_byte(value_deg: float, max_deg: float) -> int:
    # linear mapping -max_deg -> 0, +max_deg -> 255, out-of-range values pin at the ends
    if max_deg <= 0:
        return 0
    frac = (value_deg + max_deg) / (2.0 * max_deg)
    frac = max(0.0, min(1.0, frac))
    return int(round(frac * 255))


def build_frame(frames: Sequence[ChannelFrame]) -> bytes:
    # build 513-byte DMX packet (startcode + 512 channels)
    frame = bytearray(UNIVERSE_SIZE + 1)
    frame[0] = 0x00
    for f in frames:
        frame[slot_for_channel(f.pan_channel)] = deg_to_byte(f.pan_value, f.pan_max)
        frame[slot_for_channel(f.tilt_channel)] = deg_to_byte(f.tilt_value, f.tilt_max)
    return bytes(frame)
# DMX frame builder
