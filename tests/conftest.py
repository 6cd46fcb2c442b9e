import copy
import json
import os

import pytest

from streammeta.metadata.stream import parse_stream

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
FCOS_STREAM_FIXTURE = os.path.join(ROOT_DIR, "fixtures", "fcos-stream.json")


@pytest.fixture(scope="session")
def fcos_stream_raw():
    with open(FCOS_STREAM_FIXTURE, "rb") as f:
        return f.read()


@pytest.fixture
def fcos_stream_data(fcos_stream_raw):
    """Decoded fixture document, a fresh copy per test so it can be modified."""
    return copy.deepcopy(json.loads(fcos_stream_raw))


@pytest.fixture
def fcos_stream(fcos_stream_data):
    return parse_stream(fcos_stream_data)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.ini"
    monkeypatch.setenv("STREAMMETA_CONFIG", str(path))
    return path


@pytest.fixture
def fcos_stream_path():
    return FCOS_STREAM_FIXTURE
