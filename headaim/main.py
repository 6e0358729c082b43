import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from headaim.config import Settings
from headaim.core.event_log import get_event_log
from headaim.core.sink import NullSink, OutputSink
from headaim.core.targeting_loop import TargetingLoop
from headaim.dmx import ArtnetDriver, DmxSink, UartRs485Driver
from headaim.input.sources import LatestSampleInput
from headaim.mqtt.mqtt_manager import MQTTManager
from headaim.mqtt.sink import MqttSink
from headaim.rig import load_world
from headaim.api import routes_state, routes_input, routes_events, routes_health

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("headaim.app")


def build_sink(settings: Settings, mqtt_mgr=None) -> OutputSink:
    if settings.output == "dmx":
        return DmxSink(UartRs485Driver(device=settings.dmx_device))
    if settings.output == "artnet":
        return DmxSink(ArtnetDriver(target_ip=settings.artnet_ip, default_universe=settings.artnet_universe))
    if settings.output == "mqtt":
        if mqtt_mgr is None:
            logger.warning("MQTT output requested but MQTT is disabled; using null sink")
            return NullSink()
        return MqttSink(mqtt_mgr)
    return NullSink()


def startup(app: FastAPI):
    settings = Settings.from_env()
    logger.info("Starting app: loading rig from %s", settings.config_path)
    # ConfigurationError aborts startup, no loop runs on a bad rig
    world = load_world(settings.config_path)
    event_log = get_event_log()
    input_holder = LatestSampleInput()

    mqtt_mgr = None
    if settings.mqtt_enabled:
        mqtt_mgr = MQTTManager(input_holder=input_holder, host=settings.mqtt_host, port=settings.mqtt_port, event_log=event_log)
        mqtt_mgr.start()

    sink = build_sink(settings, mqtt_mgr)
    sink.open()

    loop = TargetingLoop(world, sink=sink, input_source=input_holder, hz=settings.tick_hz,
                         workers=settings.solve_workers, event_log=event_log)
    loop.start()

    app.state.settings = settings
    app.state.world = world
    app.state.event_log = event_log
    app.state.input_holder = input_holder
    app.state.mqtt_manager = mqtt_mgr
    app.state.sink = sink
    app.state.targeting_loop = loop


def shutdown(app: FastAPI):
    logger.info("Shutting down app")
    loop = getattr(app.state, "targeting_loop", None)
    if loop:
        loop.stop()
    sink = getattr(app.state, "sink", None)
    if sink:
        sink.close()
    mqtt_mgr = getattr(app.state, "mqtt_manager", None)
    if mqtt_mgr:
        mqtt_mgr.stop()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    try:
        yield
    finally:
        shutdown(app)


app = FastAPI(title="headaim API", lifespan=lifespan)

app.include_router(routes_state.router, prefix="/api/v1")
app.include_router(routes_input.router, prefix="/api/v1")
app.include_router(routes_events.router, prefix="/api/v1")
app.include_router(routes_health.router, prefix="/api/v1")
