import json

from headaim.core.event_log import EventLog, get_event_log
from headaim.core.geometry import Vector3
from headaim.core.report import ChannelFrame
from headaim.input.sources import LatestSampleInput
from headaim.mqtt import topics
from headaim.mqtt.mqtt_manager import MQTTManager
from headaim.mqtt.payloads import frames_payload, parse_json_payload, parse_sample
from headaim.mqtt.sink import MqttSink


class Msg:
    def __init__(self, topic, payload: bytes):
        self.topic = topic
        self.payload = payload


class FakePublisher:
    def __init__(self, ok=True):
        self.ok = ok
        self.published = []

    def publish(self, topic, payload):
        self.published.append((topic, payload))
        return self.ok


def test_parse_sample():
    assert parse_sample({"x": 1, "z": -0.5}) == Vector3(1, 0, -0.5)
    assert parse_sample([0.1, 0.2, 0.3]) == Vector3(0.1, 0.2, 0.3)
    assert parse_sample({"x": "left"}) is None
    assert parse_sample([1, 2]) is None
    assert parse_sample({"x": float("nan")}) is None
    assert parse_sample(None) is None
    assert parse_json_payload(b"not json") is None


def test_on_message_feeds_input_holder():
    holder = LatestSampleInput(scale=1.0, max_age_ms=None)
    mgr = MQTTManager(input_holder=holder, event_log=EventLog())
    mgr.on_message(None, None, Msg(topics.INPUT_TOPIC, json.dumps({"x": 0.5, "y": -0.25, "z": 0}).encode()))
    assert holder.sample() == Vector3(0.5, -0.25, 0)


def test_malformed_message_logged():
    holder = LatestSampleInput(scale=1.0, max_age_ms=None)
    log = EventLog()
    mgr = MQTTManager(input_holder=holder, event_log=log)
    mgr.on_message(None, None, Msg(topics.INPUT_TOPIC, b"{broken"))
    assert holder.sample() == Vector3()
    assert log.list_events()[0]["event_type"] == "parse_error"


def test_disconnect_releases_stick():
    holder = LatestSampleInput(scale=1.0, max_age_ms=None)
    holder.push((1, 0, 0))
    mgr = MQTTManager(input_holder=holder, event_log=EventLog())
    mgr.on_disconnect(None, None, None, 0)
    assert holder.sample() == Vector3()
    assert not mgr.publish(topics.FRAMES_TOPIC, "{}")


def test_mqtt_sink_publishes_whole_tick():
    pub = FakePublisher()
    sink = MqttSink(pub)
    sink.send([ChannelFrame("a", 1, 10.0, 2, -5.0, 180.0, 90.0), ChannelFrame("b", 3, 0.0, 4, 0.0, 180.0, 90.0)])
    assert len(pub.published) == 1
    topic, payload = pub.published[0]
    assert topic == topics.FRAMES_TOPIC
    doc = json.loads(payload)
    assert doc["seq"] == 1
    assert [f["id"] for f in doc["fixtures"]] == ["a", "b"]
    assert doc["fixtures"][0]["pan"] == {"channel": 1, "value": 10.0}


def test_mqtt_sink_counts_drops():
    sink = MqttSink(FakePublisher(ok=False))
    sink.send([])
    sink.send([])
    assert sink.dropped == 2


def test_frames_payload_roundtrip_values():
    doc = json.loads(frames_payload(7, [ChannelFrame("x", 9, 1.5, 10, 2.5, 90.0, 90.0)]))
    assert doc == {"seq": 7, "fixtures": [{"id": "x", "pan": {"channel": 9, "value": 1.5}, "tilt": {"channel": 10, "value": 2.5}}]}


def test_manager_keeps_injected_log():
    log = EventLog()
    mgr = MQTTManager(input_holder=LatestSampleInput(), event_log=log)
    assert mgr.event_log is log
    assert mgr.event_log is not get_event_log()
