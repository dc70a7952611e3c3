"""Compile a package into its registry file and FNIS lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from slsb.config import AppConfig, load_config
from slsb.errors import ConsistencyError, UnmappedRaceError
from slsb.pipeline.binary import registry_path, write_binary_file
from slsb.pipeline.manifest import collect_lines, manifest_path, write_manifests
from slsb.races import race_aliases, race_folder

if TYPE_CHECKING:
    from pathlib import Path

    from slsb.models import Package

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dry-run validation
# ---------------------------------------------------------------------------


@dataclass
class DryRunCheck:
    """One line of the dry-run report; *message* explains a failure."""

    label: str
    passed: bool
    message: str = ""


@dataclass
class DryRunResult:
    """Aggregated result of a dry-run build."""

    checks: list[DryRunCheck] = field(default_factory=list)
    output_dir: Path | None = None
    files: list[Path] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def estimated_files(self) -> int:
        return len(self.files)


def validate_build(
    package: Package,
    root_dir: Path,
    *,
    app_config: AppConfig | None = None,
) -> DryRunResult:
    """Check everything a build needs without writing any files."""
    if app_config is None:
        app_config = load_config()

    checks: list[DryRunCheck] = []

    # project and scene counts
    checks.append(DryRunCheck(label=f"Project loaded ({package.output_name})", passed=True))

    included = package.exportable_scenes()
    excluded = len(package.scenes) - len(included)
    label = f"{len(included)} scene{'s' if len(included) != 1 else ''} included"
    if excluded:
        label += f", {excluded} excluded (warnings or no stages)"
    checks.append(DryRunCheck(label=label, passed=True))

    # checks the manifest writer would fail on
    for scene_id in sorted(package.scenes):
        scene = package.scenes[scene_id]
        if scene.has_warnings:
            continue
        try:
            scene.check_positions()
        except ConsistencyError as exc:
            checks.append(
                DryRunCheck(label=f'Scene "{scene.name}" consistent', passed=False, message=str(exc))
            )

    races = {
        alias
        for scene in package.scenes.values()
        if not scene.has_warnings
        for template in scene.positions
        for alias in race_aliases(template.race)
    }
    unmapped: list[str] = []
    for race in sorted(races):
        try:
            race_folder(race)
        except UnmappedRaceError:
            unmapped.append(race)
    checks.append(
        DryRunCheck(
            label="Race folders available",
            passed=not unmapped,
            message=f"Unmapped: {', '.join(unmapped)}" if unmapped else "",
        )
    )

    files = [registry_path(package, root_dir, app_config=app_config)]
    if all(c.passed for c in checks):
        meshes_root = app_config.build.meshes_path(root_dir)
        state = collect_lines(package)
        files.extend(
            dict.fromkeys(
                manifest_path(meshes_root, package.output_name, race) for race in state.buckets
            )
        )

    return DryRunResult(checks=checks, output_dir=root_dir, files=files)


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


@dataclass
class BuildResult:
    """Files written by :func:`build_package`."""

    binary: Path
    manifests: list[Path] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        return [self.binary, *self.manifests]


def build_package(
    package: Package,
    root_dir: Path,
    *,
    app_config: AppConfig | None = None,
) -> BuildResult:
    """Compile *package* into *root_dir*.

    The output structure is::

        <root>/
            SKSE/SexLab/Registry/<name>.slr
            meshes/actors/<folder>/animations/<name>/FNIS_<name>[_<suffix>]_List.txt

    Parameters
    ----------
    package:
        The package to compile; it is not modified.
    root_dir:
        Export root (usually a mod folder).
    app_config:
        Optional app-level config.  Loaded from defaults if not provided.

    Returns
    -------
    BuildResult
        Paths of every file written.

    Raises
    ------
    ConsistencyError
        If an exported scene is structurally broken.
    UnmappedRaceError
        If a race has no target folder.
    """
    if app_config is None:
        app_config = load_config()

    logger.info("Compiling project %s", package.output_name)
    binary = write_binary_file(package, root_dir, app_config=app_config)
    manifests = write_manifests(package, root_dir, app_config=app_config)
    logger.info("Successfully compiled %s", root_dir)
    return BuildResult(binary=binary, manifests=manifests)
