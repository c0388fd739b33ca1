"""Tests for environment-driven settings in :mod:`referent.config`."""

from __future__ import annotations

import pytest

from referent.config import DEFAULT_BASE_URL, DEFAULT_MODEL, PipelineConfig
from referent.errors import ConfigurationError


def test_defaults_when_environment_is_empty() -> None:
    config = PipelineConfig.from_env({})

    assert config.api_key is None
    assert config.base_url == DEFAULT_BASE_URL
    assert config.model == DEFAULT_MODEL
    assert config.fetch_timeout == 30
    assert config.completion_timeout == 60
    assert config.max_content_length == 20000


def test_values_are_read_from_environment() -> None:
    config = PipelineConfig.from_env(
        {
            "OPENROUTER_API_KEY": " secret ",
            "REFERENT_MODEL": "other/model",
            "REFERENT_OUTPUT_LANGUAGE": "German",
            "REFERENT_COMPLETION_TIMEOUT": "90",
            "REFERENT_MAX_CONTENT_LENGTH": "12000",
            "REFERENT_BASE_URL": "   ",
        }
    )

    assert config.require_api_key() == "secret"
    assert config.model == "other/model"
    assert config.output_language == "German"
    assert config.completion_timeout == 90
    assert config.max_content_length == 12000
    assert config.base_url == DEFAULT_BASE_URL


def test_invalid_values_raise_configuration_error() -> None:
    """Malformed numbers in the environment surface as configuration errors."""

    with pytest.raises(ConfigurationError):
        PipelineConfig.from_env({"REFERENT_FETCH_TIMEOUT": "soon"})

    with pytest.raises(ConfigurationError):
        PipelineConfig.from_env({"REFERENT_MAX_CONTENT_LENGTH": "-5"})


def test_missing_api_key_is_reported() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        PipelineConfig().require_api_key()

    assert "OPENROUTER_API_KEY" in excinfo.value.message
    assert excinfo.value.code == "CONFIGURATION_ERROR"
