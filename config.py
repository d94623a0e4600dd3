import json
import os
from pathlib import Path

from core.errors import ConfigError
from internal.logging import LogLevel

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"
CONFIG_ENV_VAR = "SAFE_INT_ID_CONFIG"


def _require(section, name, value, kind):
    # bool is an int subclass, only accept it where bool is asked for
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"{name} must be {kind.__name__}, got {value!r}", section=section)
    return value


class IdConfig:
    __slots__ = ("epoch_year", "disambiguation_space", "secure_random")

    def __init__(self, epoch_year=2023, disambiguation_space=1024, secure_random=False):
        self.epoch_year = _require("ids", "epoch_year", epoch_year, int)
        self.disambiguation_space = _require("ids", "disambiguation_space", disambiguation_space, int)
        self.secure_random = _require("ids", "secure_random", secure_random, bool)


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = _require("server", "host", host, str)
        self.port = _require("server", "port", port, int)
        if not 0 <= port <= 65535:
            raise ConfigError(f"port out of range: {port}", section="server")


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        try:
            LogLevel.parse(level)
        except KeyError as exc:
            raise ConfigError(f"unknown log level {level!r}", section="logging", cause=exc) from exc
        self.level = level
        self.crash_file = _require("logging", "crash_file", crash_file, str)


class Config:
    __slots__ = ("ids", "server", "logging")

    def __init__(self, ids=None, server=None, logging=None):
        self.ids = ids or IdConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        if not isinstance(d, dict):
            raise ConfigError(f"config must be a JSON object, got {type(d).__name__}")
        sections = {}
        for name, section_cls in (("ids", IdConfig), ("server", ServerConfig), ("logging", LoggingConfig)):
            try:
                sections[name] = section_cls(**d.get(name, {}))
            except TypeError as exc:
                raise ConfigError(f"invalid [{name}] section: {exc}", section=name, cause=exc) from exc
        return cls(**sections)


def load_config(path=None):
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, encoding="utf-8") as file:
            data = json.load(file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"unreadable config file {config_path}", cause=exc) from exc
    return Config.from_dict(data)
