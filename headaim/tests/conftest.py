import json

import pytest
import yaml

from .rigs import make_rig


@pytest.fixture
def rig_dict():
    return make_rig()


@pytest.fixture
def write_rig(tmp_path):
    def _write(data, name="config.yaml"):
        path = tmp_path / name
        if name.endswith(".json"):
            path.write_text(json.dumps(data))
        else:
            path.write_text(yaml.safe_dump(data))
        return path
    return _write
