"""Process settings from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

OUTPUT_KINDS = ("null", "dmx", "artnet", "mqtt")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Container for environment-driven runtime settings."""

    config_path: str = field(default="config.yaml")
    tick_hz: float = field(default=60.0)
    solve_workers: int = field(default=0)
    output: str = field(default="null")
    # MQTT input/output
    mqtt_enabled: bool = field(default=False)
    mqtt_host: str = field(default="localhost")
    mqtt_port: int = field(default=1883)
    # DMX drivers
    dmx_device: str = field(default="/dev/serial0")
    artnet_ip: str = field(default="255.255.255.255")
    artnet_universe: int = field(default=0)

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        output = os.environ.get("HEADAIM_OUTPUT", defaults.output).strip().lower()
        if output not in OUTPUT_KINDS:
            output = defaults.output
        return cls(
            config_path=os.environ.get("HEADAIM_CONFIG", defaults.config_path),
            tick_hz=float(os.environ.get("HEADAIM_TICK_HZ", defaults.tick_hz)),
            solve_workers=int(os.environ.get("HEADAIM_SOLVE_WORKERS", defaults.solve_workers)),
            output=output,
            mqtt_enabled=_env_bool(os.environ.get("HEADAIM_MQTT_ENABLED"), defaults.mqtt_enabled),
            mqtt_host=os.environ.get("HEADAIM_MQTT_HOST", defaults.mqtt_host),
            mqtt_port=int(os.environ.get("HEADAIM_MQTT_PORT", defaults.mqtt_port)),
            dmx_device=os.environ.get("HEADAIM_DMX_DEVICE", defaults.dmx_device),
            artnet_ip=os.environ.get("HEADAIM_ARTNET_IP", defaults.artnet_ip),
            artnet_universe=int(os.environ.get("HEADAIM_ARTNET_UNIVERSE", defaults.artnet_universe)),
        )
