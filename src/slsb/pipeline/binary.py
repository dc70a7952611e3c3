"""Write the compiled ``.slr`` registry file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from slsb.codec import encode
from slsb.config import AppConfig, load_config

if TYPE_CHECKING:
    from pathlib import Path

    from slsb.models import Package

logger = logging.getLogger(__name__)

REGISTRY_SUFFIX = ".slr"


def registry_path(package: Package, root_dir: Path, *, app_config: AppConfig) -> Path:
    return app_config.build.registry_path(root_dir) / f"{package.output_name}{REGISTRY_SUFFIX}"


def write_binary_file(
    package: Package,
    root_dir: Path,
    *,
    app_config: AppConfig | None = None,
) -> Path:
    """Encode *package* and write it below *root_dir*.

    Scenes with warnings or without stages are left out of the file.
    """
    if app_config is None:
        app_config = load_config()

    target = registry_path(package, root_dir, app_config=app_config)
    data = encode(package)
    logger.info(
        "Writing binary file for project %s with size %d at %s",
        package.output_name, len(data), target.parent,
    )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
