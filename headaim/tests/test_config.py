from headaim.config import Settings


def test_default_settings():
    s = Settings()
    assert s.config_path == "config.yaml"
    assert s.tick_hz == 60.0
    assert s.output == "null"
    assert s.mqtt_enabled is False


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("HEADAIM_CONFIG", "/etc/headaim/rig.yaml")
    monkeypatch.setenv("HEADAIM_TICK_HZ", "30")
    monkeypatch.setenv("HEADAIM_OUTPUT", "ArtNet")
    monkeypatch.setenv("HEADAIM_MQTT_ENABLED", "yes")
    monkeypatch.setenv("HEADAIM_MQTT_PORT", "1884")
    s = Settings.from_env()
    assert s.config_path == "/etc/headaim/rig.yaml"
    assert s.tick_hz == 30.0
    assert s.output == "artnet"
    assert s.mqtt_enabled is True
    assert s.mqtt_port == 1884


def test_unknown_output_falls_back(monkeypatch):
    monkeypatch.setenv("HEADAIM_OUTPUT", "midi")
    assert Settings.from_env().output == "null"
