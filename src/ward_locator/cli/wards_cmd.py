"""Ward dataset CLI commands: point lookup, photo lookup, and dataset checks."""

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from loguru import logger

if TYPE_CHECKING:
    from ward_locator.services.ward_lookup_service import WardLookupService

wards_app = typer.Typer()


def _load_service() -> "WardLookupService":
    """Load the configured ward dataset or exit with status 1."""
    from ward_locator.core.config import get_settings
    from ward_locator.lib.boundary_loader import DatasetLoadError
    from ward_locator.services.ward_lookup_service import WardLookupService

    try:
        return WardLookupService.from_settings(get_settings())
    except DatasetLoadError as e:
        logger.error(f"Ward dataset failed to load: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


@wards_app.command("locate")
def locate(
    lat: float = typer.Option(..., "--lat", help="Latitude (-90 to 90)"),  # noqa: B008
    lng: float = typer.Option(..., "--lng", help="Longitude (-180 to 180)"),  # noqa: B008
) -> None:
    """Print the ward containing a coordinate."""
    from ward_locator.services.ward_lookup_service import InvalidCoordinateError

    service = _load_service()
    try:
        ward = service.locate_ward(lat, lng)
    except InvalidCoordinateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from e

    if ward is None:
        typer.echo(f"({lat}, {lng}) is outside the service area")
        raise typer.Exit(code=1)

    typer.echo(f"Ward {ward.ward_number}: {ward.ward_name or 'unknown'}")


@wards_app.command("photo")
def photo(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file"),  # noqa: B008
) -> None:
    """Print the EXIF GPS position of a photo and the ward it falls in."""
    service = _load_service()
    coordinate = service.extract_gps_from_image(path.read_bytes())
    if coordinate is None:
        typer.echo(f"No GPS data found in {path}")
        raise typer.Exit(code=1)

    typer.echo(f"GPS: {coordinate.latitude:.6f}, {coordinate.longitude:.6f}")
    ward = service.locate_ward(coordinate.latitude, coordinate.longitude)
    if ward is None:
        typer.echo("Outside the service area")
        raise typer.Exit(code=1)
    typer.echo(f"Ward {ward.ward_number}: {ward.ward_name or 'unknown'}")


@wards_app.command("check")
def check() -> None:
    """Load the ward dataset and report data quality issues."""
    from ward_locator.lib.boundary_loader import find_overlapping_wards

    service = _load_service()
    dataset = service.dataset

    numbers = dataset.ward_numbers()
    duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
    unnamed = sorted({n for n in numbers if dataset.zone_table.name_for(n) is None})
    overlaps = find_overlapping_wards(dataset.polygons)

    typer.echo(f"Wards loaded:      {len(dataset)}")
    typer.echo(f"Ward names:        {len(dataset.zone_table)}")
    typer.echo(f"Duplicate numbers: {', '.join(map(str, duplicates)) or 'none'}")
    typer.echo(f"Unnamed wards:     {', '.join(map(str, unnamed)) or 'none'}")
    typer.echo(f"Overlapping pairs: {', '.join(f'{a}/{b}' for a, b in overlaps) or 'none'}")
