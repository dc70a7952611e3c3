"""Scene model - a stage graph plus per-actor position templates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from slsb.codec import MODEL, TEXT, MappingOf, SequenceOf
from slsb.errors import ConsistencyError, OffsetFormatError
from slsb.models.ids import new_id
from slsb.models.position import Offset, Position
from slsb.models.stage import Stage

if TYPE_CHECKING:
    from slsb.codec import ByteWriter

logger = logging.getLogger(__name__)

_MODELS = SequenceOf(MODEL)
_DESTINATIONS = SequenceOf(TEXT)
_GRAPH = MappingOf(TEXT, MODEL)


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lower-case and trim tags, dropping empties and repeats."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class Node(BaseModel):
    """Outgoing edges of a stage. No destinations marks a terminal stage."""

    dest: list[str] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return not self.dest

    def byte_size(self) -> int:
        return _DESTINATIONS.size(self.dest)

    def write_bytes(self, writer: ByteWriter) -> None:
        _DESTINATIONS.write(self.dest, writer)


class Scene(BaseModel):
    """One animation: ordered stages, the graph linking them, actor templates."""

    id: str = Field(default_factory=new_id)
    name: str = ""
    stages: list[Stage] = Field(default_factory=list)
    graph: dict[str, Node] = Field(default_factory=dict)
    root: str = ""
    positions: list[Position] = Field(default_factory=list)
    has_warnings: bool = False

    @property
    def is_exportable(self) -> bool:
        """Whether the scene goes into compiled artifacts."""
        return not self.has_warnings and bool(self.stages)

    def get_stage(self, stage_id: str) -> Stage | None:
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        return None

    def new_stage(self) -> Stage:
        """Create a stage with one neutral position per actor slot."""
        return Stage(positions=[Position() for _ in self.positions])

    def check_positions(self) -> None:
        """Raise :class:`ConsistencyError` if stages disagree with the templates."""
        if not self.stages:
            msg = f"Scene {self.id} has 0 stages"
            raise ConsistencyError(msg, scene_id=self.id)
        expected = len(self.positions)
        for stage in self.stages:
            if len(stage.positions) != expected:
                msg = (
                    f"Stage {stage.id} of scene {self.id} has {len(stage.positions)} "
                    f"positions, expected {expected}"
                )
                raise ConsistencyError(msg, scene_id=self.id)

    # ------------------------------------------------------------------
    # Version migration
    # ------------------------------------------------------------------

    def migrate(self, old_version: int) -> None:
        """Bring a scene written by package version *old_version* up to date."""
        if old_version < 1 and not self.positions and self.stages:
            source = self.get_stage(self.root) or self.stages[0]
            self.positions = [p.template() for p in source.positions]
        if old_version < 2:
            for stage in self.stages:
                stage.tags = normalize_tags(stage.tags)
        if old_version < 3:
            self._repair_graph()
        if old_version < 4:
            self._sync_stage_positions()

    def _repair_graph(self) -> None:
        known = {stage.id for stage in self.stages}
        graph: dict[str, Node] = {}
        for stage in self.stages:
            node = self.graph.get(stage.id, Node())
            dropped = [d for d in node.dest if d not in known]
            if dropped:
                logger.warning("Scene %s: dropping unknown destinations %s", self.id, dropped)
            graph[stage.id] = Node(dest=[d for d in node.dest if d in known])
        self.graph = graph
        if self.stages and self.root not in known:
            self.root = self.stages[0].id

    def _sync_stage_positions(self) -> None:
        for stage in self.stages:
            if len(stage.positions) != len(self.positions):
                msg = (
                    f"stage {stage.id} has {len(stage.positions)} positions "
                    f"but the scene defines {len(self.positions)}"
                )
                raise ConsistencyError(msg, scene_id=self.id)
            for position, template in zip(stage.positions, self.positions, strict=True):
                position.race = template.race
                position.sex = template.sex.model_copy()

    # ------------------------------------------------------------------
    # Offsets
    # ------------------------------------------------------------------

    def import_offset(self, data: Mapping[str, object]) -> None:
        """Apply per-stage offsets of the form ``{stage_id: [{x, y, z, r}, ...]}``.

        Nothing is applied unless every stage entry is valid.
        """
        updates: list[tuple[Stage, list[Offset]]] = []
        for stage_id, entries in data.items():
            stage = self.get_stage(str(stage_id))
            if stage is None:
                msg = f"Scene {self.id} has no stage {stage_id!r}"
                raise OffsetFormatError(msg)
            if not isinstance(entries, list):
                msg = f"Expected a list of offsets for stage {stage_id} in scene {self.id}"
                raise OffsetFormatError(msg)
            if len(entries) != len(stage.positions):
                msg = (
                    f"Stage {stage_id} in scene {self.id} has {len(stage.positions)} "
                    f"positions but {len(entries)} offsets were given"
                )
                raise OffsetFormatError(msg)
            try:
                offsets = [Offset.model_validate(entry) for entry in entries]
            except PydanticValidationError as exc:
                msg = f"Invalid offset for stage {stage_id} in scene {self.id}: {exc}"
                raise OffsetFormatError(msg) from None
            updates.append((stage, offsets))

        for stage, offsets in updates:
            for position, offset in zip(stage.positions, offsets, strict=True):
                position.offset = offset
        logger.debug("Scene %s: imported offsets for %d stages", self.id, len(updates))

    # ------------------------------------------------------------------
    # Binary encoding
    # ------------------------------------------------------------------

    def byte_size(self) -> int:
        return (
            TEXT.size(self.id)
            + TEXT.size(self.name)
            + _MODELS.size(self.positions)
            + _MODELS.size(self.stages)
            + TEXT.size(self.root)
            + _GRAPH.size(self.graph)
        )

    def write_bytes(self, writer: ByteWriter) -> None:
        TEXT.write(self.id, writer)
        TEXT.write(self.name, writer)
        _MODELS.write(self.positions, writer)
        _MODELS.write(self.stages, writer)
        TEXT.write(self.root, writer)
        _GRAPH.write(self.graph, writer)
