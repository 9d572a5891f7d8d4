"""
Map source — load map documents from JSON files on disk.

The default map is read once at start-up from ``MAP_FILE``; requests may
still supply their own map inline.
"""

from pathlib import Path
from typing import Any

from jsontransform.config import Settings
from jsontransform.core.exceptions import MalformedMapException, NotFoundException
from jsontransform.core.logging import get_logger
from jsontransform.mappers.map_interpreter import groups, loads_map

logger = get_logger(__name__)


def load_map_file(path: str | Path) -> dict[str, Any]:
    """
    Read and validate a map document file.

    Raises:
        NotFoundException:                  The file does not exist.
        MalformedMapException:              Invalid JSON or wrong shape.
        DuplicateDestinationFieldException: A group repeats a destination field.
    """
    map_path = Path(path)
    if not map_path.is_file():
        raise NotFoundException(
            message=f"Map file '{map_path}' not found.",
            details={"map_file": str(map_path)},
        )

    try:
        text = map_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedMapException(
            message=f"Map file '{map_path}' is not UTF-8 text.",
            details={"map_file": str(map_path)},
        ) from exc

    map_document = loads_map(text)
    # Validate the shape up front so a bad file fails at start-up
    group_specs = groups(map_document)

    logger.info(
        "Map file loaded",
        extra={
            "map_file": str(map_path),
            "group_count": len(group_specs),
            "field_count": sum(len(g.field_specs) for g in group_specs),
        },
    )
    return map_document


def load_default_map(settings: Settings) -> dict[str, Any] | None:
    """Load the configured default map, or None when ``MAP_FILE`` is unset."""
    if not settings.map_file:
        logger.info("No default map file configured")
        return None
    return load_map_file(settings.map_file)
