"""Tests for explorer configuration.

Covers:
- Default values reproduce the stock behaviour
- Loading from environment variables
- Type coercion (string env vars → numeric fields)
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from aoi_explorer.core.config import (
    DEFAULT_NOMINATIM_URL,
    ConfigValidationError,
    ExplorerConfig,
    validate_config,
)
from aoi_explorer.core.constants import Basemap

_ENV_KEYS = (
    "AOI_SEARCH_PROVIDER",
    "AOI_NOMINATIM_URL",
    "AOI_USER_AGENT",
    "AOI_SEARCH_TIMEOUT_S",
    "AOI_DEFAULT_BASEMAP",
    "AOI_RECENTER_STRATEGY",
)


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}


class TestExplorerConfigDefaults:
    """Verify default configuration values."""

    def test_default_provider(self) -> None:
        assert ExplorerConfig().search_provider == "nominatim"

    def test_default_nominatim_url(self) -> None:
        assert ExplorerConfig().nominatim_url == DEFAULT_NOMINATIM_URL

    def test_default_user_agent_is_versioned(self) -> None:
        assert ExplorerConfig().user_agent.startswith("aoi-explorer/")

    def test_default_timeout(self) -> None:
        assert ExplorerConfig().search_timeout_s == 10.0

    def test_default_basemap_is_satellite(self) -> None:
        assert ExplorerConfig().basemap is Basemap.SATELLITE

    def test_default_recenter_strategy(self) -> None:
        assert ExplorerConfig().recenter_strategy == "bbox"

    def test_defaults_are_valid(self) -> None:
        validate_config(ExplorerConfig())

    def test_frozen(self) -> None:
        cfg = ExplorerConfig()
        with pytest.raises(AttributeError):
            cfg.search_provider = "other"  # type: ignore[misc]


class TestExplorerConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "AOI_SEARCH_PROVIDER": "custom",
            "AOI_NOMINATIM_URL": "http://localhost:8080",
            "AOI_USER_AGENT": "survey-desk/2.0",
            "AOI_SEARCH_TIMEOUT_S": "2.5",
            "AOI_DEFAULT_BASEMAP": "street",
            "AOI_RECENTER_STRATEGY": "centroid",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = ExplorerConfig.from_env()

        assert cfg.search_provider == "custom"
        assert cfg.nominatim_url == "http://localhost:8080"
        assert cfg.user_agent == "survey-desk/2.0"
        assert cfg.search_timeout_s == 2.5
        assert cfg.basemap is Basemap.STREET
        assert cfg.recenter_strategy == "centroid"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = ExplorerConfig.from_env()
        assert cfg == ExplorerConfig()

    def test_unparseable_timeout_raises(self) -> None:
        with (
            patch.dict(os.environ, {"AOI_SEARCH_TIMEOUT_S": "soon"}, clear=False),
            pytest.raises(ValueError),
        ):
            ExplorerConfig.from_env()


class TestConfigValidation:
    """Fail-fast validation of out-of-range values."""

    @pytest.mark.parametrize(
        ("env", "key"),
        [
            ({"AOI_SEARCH_PROVIDER": ""}, "AOI_SEARCH_PROVIDER"),
            ({"AOI_NOMINATIM_URL": "ftp://example.org"}, "AOI_NOMINATIM_URL"),
            ({"AOI_USER_AGENT": ""}, "AOI_USER_AGENT"),
            ({"AOI_SEARCH_TIMEOUT_S": "0"}, "AOI_SEARCH_TIMEOUT_S"),
            ({"AOI_SEARCH_TIMEOUT_S": "-1"}, "AOI_SEARCH_TIMEOUT_S"),
            ({"AOI_DEFAULT_BASEMAP": "terrain"}, "AOI_DEFAULT_BASEMAP"),
            ({"AOI_RECENTER_STRATEGY": "median"}, "AOI_RECENTER_STRATEGY"),
        ],
    )
    def test_invalid_values_rejected(self, env: dict[str, str], key: str) -> None:
        with (
            patch.dict(os.environ, env, clear=False),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            ExplorerConfig.from_env()
        assert exc_info.value.key == key
        assert key in str(exc_info.value)

    def test_error_carries_code(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config(ExplorerConfig(search_timeout_s=0))
        assert exc_info.value.code == "CONFIG_VALIDATION_FAILED"
        assert exc_info.value.stage == "config"
        assert exc_info.value.value == 0
