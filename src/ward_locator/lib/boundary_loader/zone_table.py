"""Ward-name table reader: a JSON array where ward N's name sits at index N-1."""

import json
from pathlib import Path

from loguru import logger

from ward_locator.lib.boundary_loader.types import DatasetLoadError, WardZoneTable


def parse_zone_table(data: object, *, source: str = "<memory>") -> WardZoneTable:
    """Validate a decoded zone table document.

    Null entries are kept as unknown names so later positions stay aligned.

    Raises:
        DatasetLoadError: If the document is not an array of strings or nulls.
    """
    if not isinstance(data, list):
        msg = f"Ward zone table in {source} must be a JSON array, got {type(data).__name__}"
        raise DatasetLoadError(msg)

    names: list[str | None] = []
    for i, entry in enumerate(data):
        if entry is None:
            names.append(None)
        elif isinstance(entry, str):
            names.append(entry.strip() or None)
        else:
            msg = f"Ward zone table entry {i} in {source} must be a string, got {type(entry).__name__}"
            raise DatasetLoadError(msg)

    return WardZoneTable(names=tuple(names))


def read_zone_table(file_path: Path) -> WardZoneTable:
    """Read the ward-name table from a JSON file.

    Raises:
        DatasetLoadError: If the file is missing, not valid JSON, or not an
            array of strings.
    """
    logger.info(f"Reading ward zone table: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        msg = f"Ward zone table not found: {file_path}"
        raise DatasetLoadError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read ward zone table {file_path}: {e}"
        raise DatasetLoadError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Malformed JSON in ward zone table {file_path}: {e}"
        raise DatasetLoadError(msg) from e

    table = parse_zone_table(data, source=str(file_path))
    logger.info(f"Parsed {len(table)} ward names")
    return table
