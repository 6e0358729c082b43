def make_rig(**overrides):
    rig = {
        "movingHeads": [
            {
                "name": "left",
                "position": [0, 0, 0],
                "pan": {"channel": 1, "value": 0, "maxValue": 180},
                "tilt": {"channel": 2, "value": 0, "maxValue": 90},
            },
            {
                "name": "right",
                "position": [10, 0, 0],
                "pan": {"channel": 3, "value": 0, "maxValue": 180},
                "tilt": {"channel": 4, "value": 0, "maxValue": 90},
            },
        ],
        "room": [10, 10, 10],
        "home": [5, 5, 5],
        "speed": 1.0,
    }
    rig.update(overrides)
    return rig
