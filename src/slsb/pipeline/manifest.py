"""Race-grouped FNIS animation list generation.

Every exported stage position contributes one or more list lines. Lines are
collected per race bucket and written to one file per target folder::

    meshes/actors/<folder>/animations/<package>/FNIS_<package>[_<suffix>]_List.txt
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from slsb.config import AppConfig, load_config
from slsb.models import RESERVED_EVENTS, LineKind
from slsb.races import race_aliases, race_folder

if TYPE_CHECKING:
    from pathlib import Path

    from slsb.models import Package

logger = logging.getLogger(__name__)

FIXED_LENGTH_OPTION = "a,Tn"
OBJECT_OPTION = "o"


@dataclass
class ManifestState:
    """Lines collected so far, and the events already emitted."""

    emitted: set[str] = field(default_factory=lambda: set(RESERVED_EVENTS))
    buckets: dict[str, list[str]] = field(default_factory=dict)

    def add(self, race: str, lines: list[str]) -> None:
        self.buckets.setdefault(race, []).extend(lines)


def make_fnis_line(
    kind: LineKind,
    event: str,
    prefix: str,
    options: str,
    anim_obj: list[str],
) -> str:
    """Format a single list line such as ``b -a,Tn XXXXevent event.hkx``."""
    if not options and not anim_obj:
        flags = ""
    elif not anim_obj:
        flags = f" -{options}"
    elif not options:
        flags = f" -{OBJECT_OPTION}"
    else:
        flags = f" -{OBJECT_OPTION},{options}"
    objects = "".join(f" {obj}" for obj in anim_obj)
    return f"{kind}{flags} {prefix}{event} {event}.hkx{objects}"


def make_fnis_lines(
    events: list[str],
    prefix: str,
    fixed_len: bool,
    anim_obj: list[str],
) -> list[str]:
    """Lines for one position: a basic line, or a chain for multiple events.

    Only the last line of a chain carries the fixed-length option.
    """
    if len(events) == 1:
        options = FIXED_LENGTH_OPTION if fixed_len else ""
        return [make_fnis_line(LineKind.BASIC, events[0], prefix, options, anim_obj)]

    lines = []
    last = len(events) - 1
    for i, event in enumerate(events):
        kind = LineKind.CHAIN_START if i == 0 else LineKind.CHAIN_NEXT
        options = FIXED_LENGTH_OPTION if fixed_len and i == last else ""
        lines.append(make_fnis_line(kind, event, prefix, options, anim_obj))
    return lines


def collect_lines(package: Package, state: ManifestState | None = None) -> ManifestState:
    """Walk every non-warning scene and fill race buckets with list lines.

    Raises
    ------
    ConsistencyError
        If a scene has no stages or a stage disagrees with the scene's
        position templates.
    """
    if state is None:
        state = ManifestState()
    for scene_id in sorted(package.scenes):
        scene = package.scenes[scene_id]
        if scene.has_warnings:
            logger.debug("Skipping scene %s with warnings", scene_id)
            continue
        scene.check_positions()
        for stage in scene.stages:
            for stage_position, template in zip(stage.positions, scene.positions, strict=True):
                event = stage_position.event[0]
                if event in state.emitted:
                    continue
                state.emitted.add(event)
                lines = make_fnis_lines(
                    stage_position.event,
                    package.prefix,
                    stage.is_fixed_length,
                    stage_position.anim_objects,
                )
                for race in race_aliases(template.race):
                    state.add(race, lines)
    return state


def manifest_file_name(package_name: str, race: str, folder: str) -> str:
    """File name for a race bucket inside its folder."""
    creature = folder.rsplit("/", 1)[-1]
    if creature == "character":
        return f"FNIS_{package_name}_List.txt"
    if creature == "canine":
        suffix = {"Canine": "canine", "Dog": "dog"}.get(race, "wolf")
        return f"FNIS_{package_name}_{suffix}_List.txt"
    return f"FNIS_{package_name}_{creature}_List.txt"


def manifest_path(meshes_root: Path, package_name: str, race: str) -> Path:
    """Target path for a race bucket.

    Raises
    ------
    UnmappedRaceError
        If the race has no folder.
    """
    folder = race_folder(race)
    directory = meshes_root.joinpath(*folder.split("/"), "animations", package_name)
    return directory / manifest_file_name(package_name, race, folder)


def plan_manifests(
    package: Package,
    meshes_root: Path,
    state: ManifestState | None = None,
) -> dict[Path, list[str]]:
    """Map every manifest path to its lines without touching the filesystem.

    Buckets that resolve to the same file are concatenated.
    """
    state = collect_lines(package, state)
    files: dict[Path, list[str]] = {}
    for race, lines in state.buckets.items():
        path = manifest_path(meshes_root, package.output_name, race)
        files.setdefault(path, []).extend(lines)
    return files


def write_manifests(
    package: Package,
    root_dir: Path,
    *,
    app_config: AppConfig | None = None,
) -> list[Path]:
    """Write all FNIS list files under *root_dir* and return their paths."""
    if app_config is None:
        app_config = load_config()

    files = plan_manifests(package, app_config.build.meshes_path(root_dir))
    written: list[Path] = []
    for path, lines in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            for line in lines:
                fh.write(f"{line}\n")
        logger.info("Added %d lines to %s", len(lines), path)
        written.append(path)
    return written
