import configparser
import dataclasses
import json
import os

import yaml

from streammeta.metadata.stream import Stream, loads

CONFIG_FILE = "config.ini"
CONFIG_ENV = "STREAMMETA_CONFIG"
DEFAULT_STREAM = "fcos-stable"


def get_config_path() -> str:
    return os.getenv(CONFIG_ENV, CONFIG_FILE)


def get_config():
    config = configparser.ConfigParser()
    config_path = get_config_path()
    if os.path.exists(config_path):
        config.read(config_path)
    return config


def save_config(config):
    with open(get_config_path(), "w") as configfile:
        config.write(configfile)


def get_default_stream() -> str:
    return get_config()["DEFAULT"].get("default_stream", DEFAULT_STREAM)


def format_record(record, output: str = "json") -> str:
    """Render a stream document record (a dataclass instance) as json or yaml."""
    data = dataclasses.asdict(record)
    if output == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=4)


def read_stream(fp) -> Stream:
    """Parse a stream document from an open binary file, e.g. a click.File("rb")."""
    return loads(fp.read())
