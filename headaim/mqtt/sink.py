import logging
from itertools import count
from typing import Sequence

from headaim.core.report import ChannelFrame
from headaim.core.sink import OutputSink
from headaim.mqtt import topics, payloads

logger = logging.getLogger("headaim.mqtt.sink")


class MqttSink(OutputSink):
    """Publishes the whole tick as one JSON message; publisher needs publish(topic, payload)."""

    def __init__(self, publisher, topic: str = topics.FRAMES_TOPIC):
        self.publisher = publisher
        self.topic = topic
        self._seq = count(1)
        self.dropped = 0

    def send(self, frames: Sequence[ChannelFrame]) -> None:
        seq = next(self._seq)
        if not self.publisher.publish(self.topic, payloads.frames_payload(seq, frames)):
            # broker down: frames for this tick are dropped, next tick carries fresh values
            self.dropped += 1
            if self.dropped == 1 or self.dropped % 1000 == 0:
                logger.warning("MQTT sink dropped %d frames so far", self.dropped)
