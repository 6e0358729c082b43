import threading
import time
import logging
from typing import Optional

import paho.mqtt.client as mqtt

from headaim.core.event_log import EventLog, get_event_log
from headaim.input.sources import LatestSampleInput
from headaim.mqtt import topics, payloads

logger = logging.getLogger("headaim.mqtt")


class MQTTManager:
    """Background paho client: remote joystick samples in, tick frames out."""

    def __init__(self, input_holder: Optional[LatestSampleInput] = None, host: str = "localhost", port: int = 1883,
                 event_log: Optional[EventLog] = None):
        self.input_holder = input_holder
        self.host = host
        self.port = port
        self.event_log = event_log if event_log is not None else get_event_log()
        self._stop = threading.Event()
        self._thread = None
        self.connected = False
        self.client: Optional[mqtt.Client] = None

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self.run, daemon=True, name="mqtt-manager")
        self._thread.start()

    def on_connect(self, client, userdata, flags, reason_code, properties=None):
        logger.info("MQTT connected: rc=%s", reason_code)
        self.connected = True
        client.subscribe(topics.INPUT_TOPIC)

    def on_disconnect(self, client, userdata, flags, reason_code, properties=None):
        logger.info("MQTT disconnected: rc=%s", reason_code)
        self.connected = False
        if self.input_holder is not None:
            # no device, no movement
            self.input_holder.reset()

    def on_message(self, client, userdata, msg):
        if msg.topic != topics.INPUT_TOPIC or self.input_holder is None:
            return
        sample = payloads.parse_sample(payloads.parse_json_payload(msg.payload))
        if sample is None:
            logger.warning("Dropping malformed input sample on %s", msg.topic)
            self.event_log.insert_event('WARN', 'mqtt', 'parse_error', msg.topic, {'payload': msg.payload[:200].decode('utf-8', errors='replace')})
            return
        self.input_holder.push(sample)

    def publish(self, topic: str, payload: str) -> bool:
        client = self.client
        if client is None or not self.connected:
            return False
        info = client.publish(topic, payload, qos=0)
        return info.rc == mqtt.MQTT_ERR_SUCCESS

    def run(self):
        client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2)
        client.on_connect = self.on_connect
        client.on_disconnect = self.on_disconnect
        client.on_message = self.on_message
        self.client = client

        while not self._stop.is_set():
            try:
                client.connect(self.host, self.port, keepalive=60)
                client.loop_start()
                # run until stopped
                while not self._stop.wait(1):
                    pass
                client.loop_stop()
                client.disconnect()
            except OSError:
                logger.exception("MQTT connection to %s:%s failed, retrying in 5s", self.host, self.port)
                self._stop.wait(5)

    def stop(self):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2.0)
        self.connected = False
# MQTT manager
