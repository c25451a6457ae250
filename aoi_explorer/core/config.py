"""Explorer configuration loaded from environment variables.

All values have defaults that reproduce the stock behaviour (Nominatim
search, satellite basemap, bounding-box recentering), so an empty
environment yields a working session.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, catching bad configuration at startup rather
    than on the first search.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from aoi_explorer import __version__
from aoi_explorer.core.constants import Basemap
from aoi_explorer.core.exceptions import AOIExplorerError

RECENTER_BBOX = "bbox"
RECENTER_CENTROID = "centroid"
RECENTER_STRATEGIES = (RECENTER_BBOX, RECENTER_CENTROID)

DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = f"aoi-explorer/{__version__}"


class ConfigValidationError(AOIExplorerError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ExplorerConfig:
    """Immutable explorer configuration.

    Attributes:
        search_provider: Registered search provider name.
        nominatim_url: Base URL of the Nominatim geocoding service.
        user_agent: ``User-Agent`` header sent with geocoding requests.
        search_timeout_s: HTTP timeout for a single geocoding request.
        default_basemap: Basemap shown when a session starts.
        recenter_strategy: ``"bbox"`` (bounding-box midpoint) or
            ``"centroid"`` (area centroid) for shape recentering.
    """

    search_provider: str = "nominatim"
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    user_agent: str = DEFAULT_USER_AGENT
    search_timeout_s: float = 10.0
    default_basemap: str = Basemap.SATELLITE.value
    recenter_strategy: str = RECENTER_BBOX

    @property
    def basemap(self) -> Basemap:
        """Return ``default_basemap`` as a ``Basemap`` member."""
        return Basemap(self.default_basemap)

    @classmethod
    def from_env(cls) -> ExplorerConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If ``AOI_SEARCH_TIMEOUT_S`` cannot be parsed.
        """
        config = cls(
            search_provider=os.getenv("AOI_SEARCH_PROVIDER", "nominatim"),
            nominatim_url=os.getenv("AOI_NOMINATIM_URL", DEFAULT_NOMINATIM_URL),
            user_agent=os.getenv("AOI_USER_AGENT", DEFAULT_USER_AGENT),
            search_timeout_s=float(os.getenv("AOI_SEARCH_TIMEOUT_S", "10")),
            default_basemap=os.getenv("AOI_DEFAULT_BASEMAP", Basemap.SATELLITE.value),
            recenter_strategy=os.getenv("AOI_RECENTER_STRATEGY", RECENTER_BBOX),
        )
        validate_config(config)
        return config


def validate_config(config: ExplorerConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.search_provider:
        raise ConfigValidationError(
            "AOI_SEARCH_PROVIDER",
            config.search_provider,
            "must not be empty",
        )

    if not config.nominatim_url.startswith(("http://", "https://")):
        raise ConfigValidationError(
            "AOI_NOMINATIM_URL",
            config.nominatim_url,
            "must be an http:// or https:// URL",
        )

    if not config.user_agent:
        raise ConfigValidationError(
            "AOI_USER_AGENT",
            config.user_agent,
            "must not be empty",
        )

    if config.search_timeout_s <= 0:
        raise ConfigValidationError(
            "AOI_SEARCH_TIMEOUT_S",
            config.search_timeout_s,
            "must be > 0 (seconds)",
        )

    allowed_basemaps = [b.value for b in Basemap]
    if config.default_basemap not in allowed_basemaps:
        raise ConfigValidationError(
            "AOI_DEFAULT_BASEMAP",
            config.default_basemap,
            f"must be one of {allowed_basemaps}",
        )

    if config.recenter_strategy not in RECENTER_STRATEGIES:
        raise ConfigValidationError(
            "AOI_RECENTER_STRATEGY",
            config.recenter_strategy,
            f"must be one of {list(RECENTER_STRATEGIES)}",
        )
