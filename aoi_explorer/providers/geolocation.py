"""Built-in geolocation providers for headless deployments.

Browsers and mobile hosts supply their own ``GeolocationProvider``; these
two cover servers and tests, where the position is either configured up
front or unavailable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aoi_explorer.core.exceptions import UnsupportedGeolocationError
from aoi_explorer.providers.base import GeolocationProvider

if TYPE_CHECKING:
    from aoi_explorer.models.geo import GeoPoint


class StaticGeolocationProvider(GeolocationProvider):
    """Always reports the same, preconfigured position."""

    def __init__(self, position: GeoPoint) -> None:
        self._position = position

    async def locate(self) -> GeoPoint:
        return self._position


class UnavailableGeolocationProvider(GeolocationProvider):
    """Platform without any location capability."""

    async def locate(self) -> GeoPoint:
        raise UnsupportedGeolocationError("No geolocation capability configured")
