"""Tests for configuration and initialization."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from gdoptional import Config, get_config, init
from gdoptional._config import _detect_json_output, _detect_log_level, active_config


@pytest.fixture(autouse=True)
def _reset(reset_config) -> None:
    """Every test here starts and ends uninitialized."""


class TestConfig:
    """Tests for the Config dataclass."""

    def test_default_values(self) -> None:
        config = Config()
        assert config.log_level is None
        assert config.json_output is True
        assert config.warn_on_unwrap is True

    def test_config_is_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.log_level = 'DEBUG'  # type: ignore[misc]


class TestDetect:
    """Tests for environment detection."""

    def test_level_from_env(self) -> None:
        with patch.dict(os.environ, {'GDOPTIONAL_LOG_LEVEL': 'debug'}):
            assert _detect_log_level() == 'DEBUG'

    def test_level_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_log_level() is None

    def test_level_invalid_ignored(self) -> None:
        with patch.dict(os.environ, {'GDOPTIONAL_LOG_LEVEL': 'loud'}):
            assert _detect_log_level() is None

    def test_format_console(self) -> None:
        with patch.dict(os.environ, {'GDOPTIONAL_LOG_FORMAT': 'console'}):
            assert _detect_json_output() is False

    def test_format_default_json(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_json_output() is True
        with patch.dict(os.environ, {'GDOPTIONAL_LOG_FORMAT': 'yaml'}):
            assert _detect_json_output() is True


class TestInit:
    """Tests for init() and get_config()."""

    def test_get_config_before_init_raises(self) -> None:
        with pytest.raises(RuntimeError, match='not initialized'):
            get_config()

    def test_active_config_defaults_before_init(self) -> None:
        assert active_config() == Config()

    def test_init_explicit(self) -> None:
        config = init('warning', json_output=False, warn_on_unwrap=False)
        assert config == Config(log_level='WARNING', json_output=False, warn_on_unwrap=False)
        assert get_config() is config
        assert logging.getLogger('gdoptional').level == logging.WARNING

    def test_init_from_env(self) -> None:
        with patch.dict(os.environ, {'GDOPTIONAL_LOG_LEVEL': 'ERROR', 'GDOPTIONAL_LOG_FORMAT': 'console'}):
            config = init()
        assert config.log_level == 'ERROR'
        assert config.json_output is False

    def test_init_without_level_leaves_logging_alone(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch('gdoptional._config.configure_logging') as configure:
            config = init()
        configure.assert_not_called()
        assert config.log_level is None
