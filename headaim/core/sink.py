import logging
from typing import Sequence

from headaim.core.report import ChannelFrame

logger = logging.getLogger("headaim.sink")


class OutputSink:
    """Receives every fixture's channel values once per tick."""

    def open(self):
        pass

    def close(self):
        pass

    def send(self, frames: Sequence[ChannelFrame]) -> None:
        raise NotImplementedError


class NullSink(OutputSink):
    def __init__(self):
        self.last_frames = ()

    def send(self, frames: Sequence[ChannelFrame]) -> None:
        self.last_frames = tuple(frames)
        logger.debug("Null sink received %d frames", len(self.last_frames))
