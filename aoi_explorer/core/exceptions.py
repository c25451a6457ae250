"""Unified exception taxonomy.

Every domain exception inherits from ``AOIExplorerError`` and carries
structured context fields plus a ``user_message``: the short text shown
to the user when the session recovers from the error.

Taxonomy categories
-------------------
- ``ValidationError`` : bad user or file input, never retryable.
- ``TransientError``  : temporary failures (network), retryable.
- ``PermanentError``  : the request is well formed but cannot be satisfied.

Every exception exposes ``to_error_dict()`` for a stable structured
payload suitable for logging and alert delivery.
"""

from __future__ import annotations


class AOIExplorerError(Exception):
    """Base exception for all AOI explorer errors.

    Attributes:
        message: Human-readable error description (for logs).
        stage: Operation where the error occurred
            (e.g. ``"search"``, ``"shape_import"``).
        code: Machine-readable error code (e.g. ``"SHAPE_MALFORMED"``).
        retryable: Whether repeating the operation may succeed.
        user_message: Short text surfaced to the user.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""
    #: Default user-facing text for subclasses.
    default_user_message: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        user_message: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.user_message = user_message or self.default_user_message or message
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "user_message": self.user_message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(AOIExplorerError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(AOIExplorerError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(AOIExplorerError):
    """Request cannot be satisfied. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class InputError(ValidationError):
    """Search query is empty after trimming. Ignored without a request."""

    default_stage = "search"
    default_code = "SEARCH_QUERY_EMPTY"


class NotFoundError(PermanentError):
    """Geocoding returned no results."""

    default_stage = "search"
    default_code = "SEARCH_NOT_FOUND"
    default_user_message = "Location not found"


class NetworkError(TransientError):
    """Geocoding request failed (transport, HTTP status or bad body)."""

    default_stage = "search"
    default_code = "SEARCH_NETWORK_FAILED"
    default_user_message = "Error searching location"


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


class MalformedShapeError(ValidationError):
    """File is not valid JSON or holds no recognisable polygon geometry."""

    default_stage = "shape_import"
    default_code = "SHAPE_MALFORMED"
    default_user_message = "Failed to read GeoJSON file."


class NoActiveShapeError(ValidationError):
    """Operation needs a polygon with at least 3 vertices and there is none."""

    default_stage = "shape"
    default_code = "NO_ACTIVE_SHAPE"
    default_user_message = "No polygon to export."


class CoordinateValidationError(ValidationError):
    """Latitude or longitude is outside WGS 84 bounds or not finite."""

    default_stage = "model_validation"
    default_code = "COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# Geolocation
# ---------------------------------------------------------------------------


class UnsupportedGeolocationError(PermanentError):
    """The platform offers no location capability."""

    default_stage = "geolocation"
    default_code = "GEOLOCATION_UNSUPPORTED"
    default_user_message = "Geolocation is not supported on this platform."


class GeolocationDeniedError(PermanentError):
    """The user declined (or the platform failed) to share a location."""

    default_stage = "geolocation"
    default_code = "GEOLOCATION_DENIED"
    default_user_message = "Unable to retrieve your location."
