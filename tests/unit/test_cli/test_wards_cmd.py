"""Unit tests for the wards CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ward_locator.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def ward_env(monkeypatch: pytest.MonkeyPatch, ward_files: tuple[Path, Path]) -> None:
    """Point the CLI at the two-ward test dataset."""
    boundaries, zones = ward_files
    monkeypatch.setenv("WARD_BOUNDARIES_PATH", str(boundaries))
    monkeypatch.setenv("WARD_ZONES_PATH", str(zones))
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


class TestLocateCommand:
    """Tests for `wards locate`."""

    def test_inside_ward(self) -> None:
        result = runner.invoke(app, ["wards", "locate", "--lat", "0.5", "--lng", "0.5"])
        assert result.exit_code == 0
        assert "Ward 1: Fort St. George" in result.output

    def test_outside_service_area(self) -> None:
        result = runner.invoke(app, ["wards", "locate", "--lat", "0.5", "--lng", "5"])
        assert result.exit_code == 1
        assert "outside the service area" in result.output

    def test_out_of_range(self) -> None:
        result = runner.invoke(app, ["wards", "locate", "--lat=-95", "--lng", "0.5"])
        assert result.exit_code == 2
        assert "lat" in result.output

    def test_missing_dataset(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("WARD_BOUNDARIES_PATH", str(tmp_path / "missing.geojson"))
        result = runner.invoke(app, ["wards", "locate", "--lat", "0.5", "--lng", "0.5"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestPhotoCommand:
    """Tests for `wards photo`."""

    def test_photo_without_gps(self, tmp_path: Path, jpeg_factory) -> None:
        path = tmp_path / "plain.jpg"
        path.write_bytes(jpeg_factory())
        result = runner.invoke(app, ["wards", "photo", str(path)])
        assert result.exit_code == 1
        assert "No GPS data found" in result.output

    def test_photo_outside_dataset(self, tmp_path: Path, chennai_jpeg: bytes) -> None:
        path = tmp_path / "chennai.jpg"
        path.write_bytes(chennai_jpeg)
        result = runner.invoke(app, ["wards", "photo", str(path)])
        assert result.exit_code == 1
        assert "GPS: 13.074" in result.output
        assert "Outside the service area" in result.output

    def test_photo_inside_ward(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        jpeg_factory,
        gps_factory,
        write_dataset,
        feature_factory,
        collection_factory,
    ) -> None:
        """A Chennai-tagged photo resolves against a Chennai ward."""
        ring = [[80.20, 13.05], [80.25, 13.05], [80.25, 13.10], [80.20, 13.10]]
        boundaries, zones = write_dataset(collection_factory(feature_factory("1", ring)))
        monkeypatch.setenv("WARD_BOUNDARIES_PATH", str(boundaries))
        monkeypatch.setenv("WARD_ZONES_PATH", str(zones))
        path = tmp_path / "chennai.jpg"
        path.write_bytes(jpeg_factory(gps_factory()))
        result = runner.invoke(app, ["wards", "photo", str(path)])
        assert result.exit_code == 0
        assert "Ward 1: Fort St. George" in result.output


class TestCheckCommand:
    """Tests for `wards check`."""

    def test_clean_dataset(self) -> None:
        result = runner.invoke(app, ["wards", "check"])
        assert result.exit_code == 0
        assert "Wards loaded:      2" in result.output
        assert "Duplicate numbers: none" in result.output
        assert "Overlapping pairs: none" in result.output

    def test_reports_problems(
        self, monkeypatch: pytest.MonkeyPatch, write_dataset, feature_factory, collection_factory
    ) -> None:
        square = [[0, 0], [0, 2], [2, 2], [2, 0]]
        shifted = [[1, 1], [1, 3], [3, 3], [3, 1]]
        boundaries, zones = write_dataset(
            collection_factory(
                feature_factory("1", square),
                feature_factory("1", shifted),
                feature_factory("5", [[10, 10], [10, 11], [11, 11], [11, 10]]),
            ),
        )
        monkeypatch.setenv("WARD_BOUNDARIES_PATH", str(boundaries))
        monkeypatch.setenv("WARD_ZONES_PATH", str(zones))
        result = runner.invoke(app, ["wards", "check"])
        assert result.exit_code == 0
        assert "Duplicate numbers: 1" in result.output
        assert "Unnamed wards:     5" in result.output
        assert "Overlapping pairs: 1/1" in result.output
