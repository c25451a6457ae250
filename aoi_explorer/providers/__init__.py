"""External collaborator interfaces and built-in adapters.

- SearchProvider / GeolocationProvider / MapWidget / ExportSink: capability ABCs
- NominatimSearchProvider: OpenStreetMap geocoding over httpx
- StaticGeolocationProvider / UnavailableGeolocationProvider: headless geolocation

The active search provider is selected by name via the factory, enabling
provider switching through configuration alone.
"""

from aoi_explorer.providers.base import (
    ExportSink,
    GeolocationProvider,
    MapWidget,
    ProviderError,
    SearchProvider,
)
from aoi_explorer.providers.factory import (
    NOMINATIM,
    get_provider,
    list_providers,
    register_provider,
)
from aoi_explorer.providers.geolocation import (
    StaticGeolocationProvider,
    UnavailableGeolocationProvider,
)

__all__ = [
    "NOMINATIM",
    "ExportSink",
    "GeolocationProvider",
    "MapWidget",
    "ProviderError",
    "SearchProvider",
    "StaticGeolocationProvider",
    "UnavailableGeolocationProvider",
    "get_provider",
    "list_providers",
    "register_provider",
]
