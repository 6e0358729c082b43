import pytest

from headaim.core.errors import ConfigurationError
from headaim.core.geometry import Vector3
from headaim.rig import build_world, load_rig, load_world, parse_rig

from .rigs import make_rig


def test_load_yaml(rig_dict, write_rig):
    rig = load_rig(write_rig(rig_dict))
    assert [h.name for h in rig.moving_heads] == ["left", "right"]
    assert rig.moving_heads[0].pan.max_value == 180
    assert rig.room == (10, 10, 10)
    assert rig.room_min == (0, 0, 0)


def test_load_json(rig_dict, write_rig):
    world = load_world(write_rig(rig_dict, name="rig.json"))
    assert world.target.snapshot() == Vector3(5, 5, 5)
    assert world.fixture("right").position == Vector3(10, 0, 0)
    assert world.fixture("right").tilt.id == 4


def test_vector_maps_and_default_names():
    data = make_rig(room={"x": 8, "y": 6, "z": 4}, home={"x": 1, "y": 2, "z": 3})
    for h in data["movingHeads"]:
        del h["name"]
    rig = parse_rig(data)
    assert rig.room == (8, 6, 4)
    assert [h.name for h in rig.moving_heads] == ["head-0", "head-1"]


def test_home_outside_room_is_clamped():
    world = build_world(parse_rig(make_rig(home=[50, -1, 5], roomMin=[0, 0, 1])))
    assert world.target.snapshot() == Vector3(10, 0, 5)
    assert world.target.lower == Vector3(0, 0, 1)


def test_channel_values_loaded():
    data = make_rig()
    data["movingHeads"][0]["pan"]["value"] = 33.0
    world = build_world(parse_rig(data))
    assert world.fixture("left").pan.value == 33.0


@pytest.mark.parametrize("mutate", [
    lambda d: d.update(movingHeads=[]),
    lambda d: d.pop("room"),
    lambda d: d.pop("speed"),
    lambda d: d.update(speed=-1),
    lambda d: d.update(room=[10, -1, 10]),
    lambda d: d.update(room=[10, 10]),
    lambda d: d.update(roomMin=[11, 0, 0]),
    lambda d: d.update(home={"x": 1, "y": 2}),
    lambda d: d["movingHeads"][0]["pan"].update(channel=256),
    lambda d: d["movingHeads"][0]["pan"].update(maxValue=0),
    lambda d: d["movingHeads"][1]["tilt"].update(channel=1),
    lambda d: d["movingHeads"][1].update(name="left"),
    lambda d: d["movingHeads"][0].update(position=[0, "up", 0]),
    lambda d: d.update(unexpected=True),
])
def test_invalid_rigs_rejected(mutate):
    data = make_rig()
    mutate(data)
    with pytest.raises(ConfigurationError):
        parse_rig(data)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_rig(tmp_path / "nope.yaml")


def test_bad_extension(tmp_path):
    path = tmp_path / "rig.toml"
    path.write_text("room = 1")
    with pytest.raises(ConfigurationError):
        load_rig(path)


def test_bad_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("movingHeads: [\n  - broken: {")
    with pytest.raises(ConfigurationError):
        load_rig(path)


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    with pytest.raises(ConfigurationError):
        load_rig(path)


def test_top_level_not_a_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_rig(path)
