"""Exercise catalog loader.

This module loads the static exercise catalog from a YAML file. The
catalog is read once at process start and passed explicitly to every
engine call; nothing here caches it globally.
"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from hygie.config.settings import settings
from hygie.programs.errors import InvalidConfigurationError
from hygie.programs.models import ExerciseCatalog, ExerciseDefinition
from hygie.programs.schemas import CatalogFileSchema


def _read_catalog_file(path: Path) -> dict:
    """Read and parse the raw YAML document.

    Raises:
        InvalidConfigurationError: If the file is missing or not a YAML mapping
    """
    if not path.exists():
        raise InvalidConfigurationError(f"Exercise catalog not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"Invalid YAML in exercise catalog {path}: {e}") from e

    if not isinstance(raw, dict):
        raise InvalidConfigurationError(f"Exercise catalog {path} must be a YAML mapping")
    return raw


def parse_catalog(raw: dict) -> ExerciseCatalog:
    """Validate raw catalog data and build immutable definitions.

    Args:
        raw: Parsed catalog document ({"version": ..., "exercises": [...]})

    Returns:
        Catalog in file order

    Raises:
        InvalidConfigurationError: If a row is invalid or an id is duplicated
    """
    try:
        parsed = CatalogFileSchema.model_validate(raw)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Exercise catalog schema validation failed: {e}") from e

    seen: set[str] = set()
    duplicates: list[str] = []
    for entry in parsed.exercises:
        if entry.id in seen:
            duplicates.append(entry.id)
        seen.add(entry.id)
    if duplicates:
        raise InvalidConfigurationError(f"Duplicate exercise ids in catalog: {sorted(set(duplicates))}")

    return tuple(
        ExerciseDefinition(
            id=entry.id,
            name=entry.name,
            category=entry.category,
            targets=tuple(entry.targets),
            triggers=tuple(entry.triggers),
            description=entry.description,
            coach_tip=entry.coach_tip,
            suggested_load=entry.suggested_load,
        )
        for entry in parsed.exercises
    )


def load_catalog(path: str | Path | None = None) -> ExerciseCatalog:
    """Load the exercise catalog.

    Args:
        path: Catalog file (defaults to settings.catalog_path)

    Returns:
        Immutable catalog

    Raises:
        InvalidConfigurationError: If the file is missing or invalid
    """
    catalog_path = Path(path or settings.catalog_path)
    catalog = parse_catalog(_read_catalog_file(catalog_path))
    logger.info("Exercise catalog loaded", path=str(catalog_path), exercises=len(catalog))
    return catalog
