"""Package model - the root of a project, with save/load and migration."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from slsb.codec import TEXT, U8, count_size, write_count
from slsb.errors import (
    MigrationError,
    NothingSelectedError,
    ProjectLoadError,
    SceneBuilderError,
)
from slsb.models.ids import new_prefix
from slsb.models.scene import Scene

if TYPE_CHECKING:
    from slsb.codec import ByteWriter
    from slsb.models.stage import Stage

logger = logging.getLogger(__name__)

CURRENT_VERSION = 4
PROJECT_SUFFIX = ".slsb.json"


class Package(BaseModel):
    """A collection of scenes compiled together under one name and prefix."""

    version: int = Field(default=CURRENT_VERSION, ge=0, le=255)
    name: str = ""
    author: str = "Unknown"
    prefix: str = Field(default_factory=new_prefix)
    scenes: dict[str, Scene] = Field(default_factory=dict)
    path: Path | None = Field(default=None, exclude=True)

    @property
    def output_name(self) -> str:
        """Name used for compiled artifacts; the prefix when the package is unnamed."""
        return self.name or self.prefix

    def exportable_scenes(self) -> list[Scene]:
        """Scenes that go into compiled artifacts, ordered by id."""
        return [self.scenes[k] for k in sorted(self.scenes) if self.scenes[k].is_exportable]

    # ------------------------------------------------------------------
    # Scene management
    # ------------------------------------------------------------------

    def save_scene(self, scene: Scene) -> Scene:
        logger.info("Saving or inserting scene: %s / %s", scene.id, scene.name)
        self.scenes[scene.id] = scene
        return scene

    def discard_scene(self, scene_id: str) -> Scene | None:
        scene = self.scenes.pop(scene_id, None)
        if scene is not None:
            logger.info("Deleting scene: %s / %s", scene_id, scene.name)
        return scene

    def get_scene(self, scene_id: str) -> Scene | None:
        return self.scenes.get(scene_id)

    def get_stage(self, stage_id: str) -> Stage | None:
        for scene in self.scenes.values():
            stage = scene.get_stage(stage_id)
            if stage is not None:
                return stage
        return None

    def reset(self) -> Package:
        """Replace every field with a fresh empty package in place."""
        fresh = Package()
        for name in type(self).model_fields:
            setattr(self, name, getattr(fresh, name))
        return self

    # ------------------------------------------------------------------
    # Version migration
    # ------------------------------------------------------------------

    def migrate(self) -> None:
        """Bring every scene up to :data:`CURRENT_VERSION`.

        Raises
        ------
        MigrationError
            If any scene fails; the error names the scene.
        """
        if self.version >= CURRENT_VERSION:
            return
        old_version = self.version
        for scene_id, scene in self.scenes.items():
            try:
                scene.migrate(old_version)
            except (SceneBuilderError, ValueError) as exc:
                msg = f"Failed to update scene {scene_id}: {exc}"
                raise MigrationError(msg, scene_id=scene_id) from exc
        self.version = CURRENT_VERSION
        logger.debug("Migrated %d scenes from version %d", len(self.scenes), old_version)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def set_name_from_path(self, path: Path) -> None:
        name = path.name
        self.name = name[: -len(PROJECT_SUFFIX)] if name.endswith(PROJECT_SUFFIX) else path.stem

    def save(self, path: Path | None = None) -> Path:
        """Save package to a ``.slsb.json`` file and return its path."""
        save_path = path or self.path
        if save_path is None:
            msg = "No path to save project to"
            raise NothingSelectedError(msg)
        if save_path.is_dir():
            save_path = save_path / f"{self.output_name}{PROJECT_SUFFIX}"
        self.set_name_from_path(save_path)
        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            save_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            msg = f"cannot write project file {save_path}: {exc}"
            raise ProjectLoadError(msg) from None
        self.path = save_path
        logger.info("Saved project %s", self.name)
        return save_path

    @classmethod
    def load(cls, path: Path) -> Package:
        """Load a package from a ``.slsb.json`` file, migrating it if needed."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            msg = f"project file not found: {path}"
            raise ProjectLoadError(msg) from None
        except PermissionError:
            msg = f"permission denied reading project file: {path}"
            raise ProjectLoadError(msg) from None
        except OSError as exc:
            msg = f"cannot read project file {path}: {exc}"
            raise ProjectLoadError(msg) from None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"project file contains invalid JSON: {exc}"
            raise ProjectLoadError(msg) from None
        if isinstance(data, dict):
            # Files written before versioning carry no version field.
            data.setdefault("version", 0)
        try:
            package = cls.model_validate(data)
        except PydanticValidationError as exc:
            msg = f"project file has invalid structure: {exc}"
            raise ProjectLoadError(msg) from None
        if package.version > CURRENT_VERSION:
            msg = (
                f"project file version {package.version} is newer than "
                f"supported version {CURRENT_VERSION}"
            )
            raise ProjectLoadError(msg)
        package.migrate()
        package.set_name_from_path(path)
        package.path = path
        logger.info("Loaded project %s", package.name)
        return package

    # ------------------------------------------------------------------
    # Binary encoding
    # ------------------------------------------------------------------

    def byte_size(self) -> int:
        return (
            U8.size(self.version)
            + TEXT.size(self.name)
            + TEXT.size(self.author)
            + TEXT.size(self.prefix)
            + count_size()
            + sum(scene.byte_size() for scene in self.exportable_scenes())
        )

    def write_bytes(self, writer: ByteWriter) -> None:
        scenes = self.exportable_scenes()
        U8.write(self.version, writer)
        TEXT.write(self.name, writer)
        TEXT.write(self.author, writer)
        TEXT.write(self.prefix, writer)
        write_count(len(scenes), writer)
        for scene in scenes:
            scene.write_bytes(writer)
