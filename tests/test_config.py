"""Unit tests for configuration loading."""

import pytest
from config import (
    CONFIG_ENV_VAR,
    Config,
    IdConfig,
    ServerConfig,
    LoggingConfig,
    load_config,
)
from core.errors import ConfigError


class TestIdConfig:
    """Tests for IdConfig class."""

    def test_default_values(self):
        """IdConfig has sensible defaults."""
        config = IdConfig()
        assert config.epoch_year == 2023
        assert config.disambiguation_space == 1024
        assert config.secure_random is False

    def test_custom_values(self):
        """IdConfig accepts custom values."""
        config = IdConfig(epoch_year=2030, disambiguation_space=256, secure_random=True)
        assert config.epoch_year == 2030
        assert config.disambiguation_space == 256
        assert config.secure_random is True

    @pytest.mark.parametrize("field,value", [
        ("epoch_year", "2023"),
        ("epoch_year", 2023.5),
        ("disambiguation_space", None),
        ("disambiguation_space", True),
        ("secure_random", "false"),
        ("secure_random", 0),
    ])
    def test_rejects_wrong_types(self, field, value):
        """Wrongly typed fields raise ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            IdConfig(**{field: value})
        assert exc_info.value.context["section"] == "ids"


class TestServerConfig:
    """Tests for ServerConfig class."""

    def test_default_values(self):
        """ServerConfig has sensible defaults."""
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8080

    def test_custom_values(self):
        """ServerConfig accepts custom values."""
        config = ServerConfig(host="0.0.0.0", port=9000)
        assert config.host == "0.0.0.0"
        assert config.port == 9000

    @pytest.mark.parametrize("kwargs", [{"port": "abc"}, {"port": 70000}, {"port": True}, {"host": 127}])
    def test_rejects_bad_values(self, kwargs):
        """Wrong types or out-of-range port raise ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            ServerConfig(**kwargs)
        assert exc_info.value.context["section"] == "server"


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        """LoggingConfig has sensible defaults."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.crash_file == "logs/crash.log"

    def test_accepts_warning_alias(self):
        """Level names accepted by the logger are valid."""
        assert LoggingConfig(level="warning").level == "warning"

    @pytest.mark.parametrize("level", ["LOUD", 10, None])
    def test_rejects_unknown_level(self, level):
        """Unknown levels fail at load time, not at app startup."""
        with pytest.raises(ConfigError) as exc_info:
            LoggingConfig(level=level)
        assert exc_info.value.context["section"] == "logging"


class TestConfig:
    """Tests for main Config class."""

    def test_default_config(self):
        """Config creates default sub-configs."""
        config = Config()
        assert isinstance(config.ids, IdConfig)
        assert isinstance(config.server, ServerConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_from_dict(self):
        """Config.from_dict parses dictionary."""
        data = {
            "ids": {"epoch_year": 2024, "disambiguation_space": 512},
            "server": {"port": 9000},
            "logging": {"level": "DEBUG"}
        }
        config = Config.from_dict(data)
        assert config.ids.epoch_year == 2024
        assert config.ids.disambiguation_space == 512
        assert config.server.port == 9000
        assert config.logging.level == "DEBUG"

    def test_from_dict_partial(self):
        """Config.from_dict handles partial data."""
        config = Config.from_dict({"ids": {"disambiguation_space": 2048}})
        assert config.ids.disambiguation_space == 2048
        assert config.server.port == 8080  # Default

    def test_from_dict_unknown_key(self):
        """Unknown keys raise ConfigError naming the section."""
        with pytest.raises(ConfigError) as exc_info:
            Config.from_dict({"ids": {"random_values": 1024}})
        assert exc_info.value.context["section"] == "ids"
        assert isinstance(exc_info.value.cause, TypeError)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_reads_file(self, monkeypatch):
        """load_config reads from config.json."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        config = load_config()
        assert isinstance(config, Config)
        assert config.ids.epoch_year == 2023
        assert config.ids.disambiguation_space == 1024

    def test_load_config_missing_file(self, tmp_path):
        """load_config returns defaults for missing file."""
        config = load_config(tmp_path / "nonexistent.json")
        assert isinstance(config, Config)
        assert config.ids.disambiguation_space == 1024  # Default

    def test_load_config_env_var(self, tmp_path, monkeypatch):
        """Path can come from the environment."""
        path = tmp_path / "ids.json"
        path.write_text('{"ids": {"epoch_year": 2025}}')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().ids.epoch_year == 2025

    def test_load_config_malformed(self, tmp_path):
        """Malformed JSON raises ConfigError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)

    @pytest.mark.parametrize("raw", ["[]", "42", '"ids"'])
    def test_load_config_not_an_object(self, tmp_path, raw):
        """A top-level value other than an object raises ConfigError."""
        path = tmp_path / "list.json"
        path.write_text(raw)
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_config_not_utf8(self, tmp_path):
        """Undecodable bytes raise ConfigError."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_load_config_directory(self, tmp_path):
        """A path that cannot be opened raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert isinstance(exc_info.value.cause, OSError)
