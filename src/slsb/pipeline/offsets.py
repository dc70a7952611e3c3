"""Apply per-stage placement offsets from an offset document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import jsonschema
import yaml

from slsb.errors import OffsetFormatError, ProjectLoadError
from slsb.validation import validate_offsets_json

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from slsb.models import Package

logger = logging.getLogger(__name__)


def load_offsets_file(path: Path) -> object:
    """Read a YAML (or JSON) offset document."""
    try:
        with path.open(encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as exc:
        msg = f"cannot read offset file {path}: {exc}"
        raise ProjectLoadError(msg) from None
    except yaml.YAMLError as exc:
        msg = f"offset file is not valid YAML: {exc}"
        raise ProjectLoadError(msg) from None


def import_offsets(package: Package, data: object) -> int:
    """Apply an offset document to *package* and return the number of scenes touched.

    Every top-level key must name a scene of the package and map to a
    mapping; the inner structure is checked by the scene itself. The package is
    only modified when the whole document applies cleanly.
    """
    try:
        validate_offsets_json(data)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        msg = f"Not a valid offset file at {location}: {exc.message}"
        raise OffsetFormatError(msg) from None
    data = cast("Mapping[str, object]", data)

    unknown = [scene_id for scene_id in data if scene_id not in package.scenes]
    if unknown:
        msg = f"Offset file references unknown scenes: {', '.join(sorted(unknown))}"
        raise OffsetFormatError(msg)

    updated = {scene_id: package.scenes[scene_id].model_copy(deep=True) for scene_id in data}
    for scene_id, stages in data.items():
        updated[scene_id].import_offset(stages)

    package.scenes.update(updated)
    logger.info("Imported offsets for %d scenes", len(updated))
    return len(updated)


def import_offsets_file(package: Package, path: Path) -> int:
    """Read *path* and apply it with :func:`import_offsets`."""
    return import_offsets(package, load_offsets_file(path))
