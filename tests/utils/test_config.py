"""Tests for renderer configuration."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from tickbar.utils.config import Config, ConfigError, InvalidConfigValueError


@pytest.fixture(autouse=True)
def clean_environment():
    """Hide any TICKBAR_* variables from the host environment."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("TICKBAR_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "tickbar.json"


class TestConfigLoading:
    """Defaults, file and environment sources."""

    def test_defaults_without_file(self, config_file):
        config = Config(config_file)

        assert config.get("bar_width") == 40
        assert config.get("min_refresh_interval") == 0.1
        assert config.get("prefix") == ""

    def test_file_overrides_defaults(self, config_file):
        config_file.write_text(json.dumps({"bar_width": 20, "prefix": "Sync"}))

        config = Config(config_file)

        assert config.get("bar_width") == 20
        assert config.get("prefix") == "Sync"
        assert config.get("min_refresh_interval") == 0.1

    def test_environment_overrides_file(self, config_file):
        config_file.write_text(json.dumps({"bar_width": 20}))

        with patch.dict(os.environ, {"TICKBAR_BAR_WIDTH": "15", "TICKBAR_PREFIX": "Env"}):
            config = Config(config_file)

        assert config.renderer_options() == {
            "bar_width": 15,
            "min_refresh_interval": 0.1,
            "prefix": "Env"
        }

    def test_malformed_file_falls_back_to_defaults(self, config_file, caplog):
        config_file.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="tickbar.utils.config"):
            config = Config(config_file)

        assert config.get("bar_width") == 40
        assert "Ignoring unreadable config file" in caplog.text

    def test_non_object_file_is_ignored(self, config_file, caplog):
        config_file.write_text(json.dumps([1, 2, 3]))

        with caplog.at_level(logging.WARNING, logger="tickbar.utils.config"):
            config = Config(config_file)

        assert config.as_dict() == {"bar_width": 40, "min_refresh_interval": 0.1, "prefix": ""}
        assert "expected a JSON object" in caplog.text

    def test_set_and_save(self, config_file):
        config = Config(config_file)
        config.set("bar_width", 12)
        config.save()

        assert json.loads(config_file.read_text())["bar_width"] == 12
        assert Config(config_file).get("bar_width") == 12

    def test_get_default_for_unknown_key(self, config_file):
        assert Config(config_file).get("missing", "fallback") == "fallback"


class TestRendererOptions:
    """Validation of renderer keyword arguments."""

    def test_string_values_are_coerced(self, config_file):
        with patch.dict(os.environ, {"TICKBAR_MIN_REFRESH_INTERVAL": "0.25", "TICKBAR_BAR_WIDTH": "30"}):
            options = Config(config_file).renderer_options()

        assert options["bar_width"] == 30
        assert options["min_refresh_interval"] == 0.25

    @pytest.mark.parametrize("value", [0, -3, "wide", 2.5, True, None])
    def test_invalid_bar_width(self, config_file, value):
        config = Config(config_file)
        config.set("bar_width", value)

        with pytest.raises(InvalidConfigValueError, match="bar_width"):
            config.renderer_options()

    @pytest.mark.parametrize("value", [-0.1, "soon", False])
    def test_invalid_interval(self, config_file, value):
        config = Config(config_file)
        config.set("min_refresh_interval", value)

        with pytest.raises(InvalidConfigValueError, match="min_refresh_interval"):
            config.renderer_options()

    def test_invalid_prefix(self, config_file):
        config = Config(config_file)
        config.set("prefix", 42)

        with pytest.raises(ConfigError):
            config.renderer_options()

    def test_zero_interval_allowed(self, config_file):
        config = Config(config_file)
        config.set("min_refresh_interval", 0)

        assert config.renderer_options()["min_refresh_interval"] == 0.0
