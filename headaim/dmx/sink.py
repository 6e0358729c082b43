import logging
from typing import Optional, Sequence

from headaim.core.report import ChannelFrame
from headaim.core.sink import OutputSink
from headaim.dmx import frame_builder

logger = logging.getLogger("headaim.dmx")


class DmxSink(OutputSink):
    """Encodes each tick into one DMX universe and sends it through a driver.

    Works with any driver exposing open/close/send_frame(frame) -> bool.
    """

    def __init__(self, driver):
        self.driver = driver
        self.last_frame: Optional[bytes] = None
        self.failures = 0

    def open(self):
        self.driver.open()

    def close(self):
        self.driver.close()

    def send(self, frames: Sequence[ChannelFrame]) -> None:
        frame = frame_builder.build_frame(frames)
        success = self.driver.send_frame(frame)
        self.last_frame = frame
        if not success:
            self.failures += 1
            raise IOError("DMX send_frame failed")
# DMX output sink
