"""Tests for the unified exception taxonomy.

Validates:
- AOIExplorerError hierarchy and structured attributes
- Category classification (validation, transient, permanent)
- ``to_error_dict()`` produces stable payload keys
- User-facing text defaults per error type
- All domain exceptions are AOIExplorerError subclasses
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from aoi_explorer.core.config import ConfigValidationError
from aoi_explorer.core.exceptions import (
    AOIExplorerError,
    CoordinateValidationError,
    GeolocationDeniedError,
    InputError,
    MalformedShapeError,
    NetworkError,
    NoActiveShapeError,
    NotFoundError,
    PermanentError,
    TransientError,
    UnsupportedGeolocationError,
    ValidationError,
)
from aoi_explorer.providers.base import ProviderError


class TestAOIExplorerErrorBase:
    """AOIExplorerError base class behavior."""

    def test_default_attributes(self) -> None:
        err = AOIExplorerError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.user_message == "boom"

    def test_custom_attributes(self) -> None:
        err = AOIExplorerError(
            "fail",
            stage="search",
            code="X",
            retryable=True,
            user_message="Try again",
        )
        assert err.stage == "search"
        assert err.code == "X"
        assert err.retryable is True
        assert err.user_message == "Try again"

    def test_str_is_message(self) -> None:
        assert str(AOIExplorerError("boom")) == "boom"

    def test_uncategorised_category_follows_retryable(self) -> None:
        assert AOIExplorerError("x", retryable=True).category == "transient"
        assert AOIExplorerError("x").category == "permanent"


class TestCategories:
    def test_validation(self) -> None:
        err = ValidationError("bad")
        assert err.category == "validation"
        assert err.retryable is False

    def test_transient(self) -> None:
        err = TransientError("later")
        assert err.category == "transient"
        assert err.retryable is True

    def test_permanent(self) -> None:
        err = PermanentError("never")
        assert err.category == "permanent"
        assert err.retryable is False

    def test_retryable_override(self) -> None:
        assert TransientError("x", retryable=False).retryable is False


class TestToErrorDict:
    EXPECTED_KEYS: ClassVar[set[str]] = {
        "category",
        "code",
        "stage",
        "message",
        "retryable",
        "user_message",
    }

    def test_stable_keys(self) -> None:
        assert set(NetworkError("timeout").to_error_dict()) == self.EXPECTED_KEYS

    def test_values(self) -> None:
        payload = MalformedShapeError("Not valid JSON: line 1").to_error_dict()
        assert payload == {
            "category": "validation",
            "code": "SHAPE_MALFORMED",
            "stage": "shape_import",
            "message": "Not valid JSON: line 1",
            "retryable": False,
            "user_message": "Failed to read GeoJSON file.",
        }


class TestDomainErrors:
    @pytest.mark.parametrize(
        ("cls", "base", "code"),
        [
            (InputError, ValidationError, "SEARCH_QUERY_EMPTY"),
            (NotFoundError, PermanentError, "SEARCH_NOT_FOUND"),
            (NetworkError, TransientError, "SEARCH_NETWORK_FAILED"),
            (MalformedShapeError, ValidationError, "SHAPE_MALFORMED"),
            (NoActiveShapeError, ValidationError, "NO_ACTIVE_SHAPE"),
            (CoordinateValidationError, ValidationError, "COORDINATE_INVALID"),
            (UnsupportedGeolocationError, PermanentError, "GEOLOCATION_UNSUPPORTED"),
            (GeolocationDeniedError, PermanentError, "GEOLOCATION_DENIED"),
        ],
    )
    def test_hierarchy_and_code(
        self, cls: type[AOIExplorerError], base: type[AOIExplorerError], code: str
    ) -> None:
        err = cls("detail")
        assert isinstance(err, base)
        assert isinstance(err, AOIExplorerError)
        assert err.code == code

    @pytest.mark.parametrize(
        ("cls", "text"),
        [
            (NotFoundError, "Location not found"),
            (NetworkError, "Error searching location"),
            (MalformedShapeError, "Failed to read GeoJSON file."),
            (NoActiveShapeError, "No polygon to export."),
            (GeolocationDeniedError, "Unable to retrieve your location."),
        ],
    )
    def test_default_user_message(self, cls: type[AOIExplorerError], text: str) -> None:
        assert cls("internal detail").user_message == text

    def test_user_message_override(self) -> None:
        err = MalformedShapeError("x", user_message="No polygon geometry found in GeoJSON.")
        assert err.user_message == "No polygon geometry found in GeoJSON."

    def test_config_error_is_explorer_error(self) -> None:
        err = ConfigValidationError("AOI_USER_AGENT", "", "must not be empty")
        assert isinstance(err, AOIExplorerError)
        assert err.code == "CONFIG_VALIDATION_FAILED"

    def test_provider_error_str(self) -> None:
        err = ProviderError("mapbox", "not registered")
        assert isinstance(err, AOIExplorerError)
        assert err.code == "PROVIDER_ERROR"
        assert str(err) == "[mapbox] not registered"
