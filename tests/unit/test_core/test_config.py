"""Unit tests for core configuration module."""

import pytest
from pydantic import ValidationError

from ward_locator.core.config import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_defaults(self) -> None:
        """Default values are applied correctly."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.ward_boundaries_path == "./data/ward-boundaries.geojson"
        assert settings.ward_zones_path == "./data/ward-zones.json"
        assert settings.ward_number_property == "Name"
        assert settings.invalid_feature_policy == "fail"
        assert settings.check_ward_overlaps is False
        assert settings.max_photo_size_mb == 10
        assert settings.log_level == "INFO"
        assert settings.cors_origins == ""
        assert settings.api_v1_prefix == "/api/v1"

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings load from environment variables."""
        monkeypatch.setenv("WARD_BOUNDARIES_PATH", "/srv/data/wards.geojson")
        monkeypatch.setenv("WARD_NUMBER_PROPERTY", "ward_no")
        monkeypatch.setenv("INVALID_FEATURE_POLICY", "skip")
        monkeypatch.setenv("CHECK_WARD_OVERLAPS", "true")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.ward_boundaries_path == "/srv/data/wards.geojson"
        assert settings.ward_number_property == "ward_no"
        assert settings.invalid_feature_policy == "skip"
        assert settings.check_ward_overlaps is True

    def test_invalid_feature_policy_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INVALID_FEATURE_POLICY", "ignore")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_empty_ward_number_property_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ward_number_property="")  # type: ignore[call-arg]

    def test_max_photo_size_bytes(self) -> None:
        settings = Settings(_env_file=None, max_photo_size_mb=2)  # type: ignore[call-arg]
        assert settings.max_photo_size_bytes == 2 * 1024 * 1024

    def test_max_photo_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_photo_size_mb=0)  # type: ignore[call-arg]

    def test_cors_origin_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CORS origins string is parsed into a list."""
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, http://example.com")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.cors_origin_list == ["http://localhost:3000", "http://example.com"]

    def test_cors_origin_list_empty(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.cors_origin_list == []

    def test_log_level_normalized(self) -> None:
        settings = Settings(_env_file=None, log_level="debug")  # type: ignore[call-arg]
        assert settings.log_level == "DEBUG"

    def test_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(_env_file=None, log_level="LOUD")  # type: ignore[call-arg]
