"""Convert legacy (SLAL) animation lists into a native package.

The legacy document is a flat list of animations, each with its actors and a
per-actor list of stage events::

    {
        "name": "MyPack",
        "animations": [
            {
                "name": "Doggy",
                "creature_race": "Canines",
                "tags": "Dog, Doggy",
                "stage": [{"number": 1, "timer": 4.5}],
                "actors": [
                    {"type": "Female", "stages": [{"id": "MyPack_A1_S1"}, ...]},
                    {"type": "CreatureMale", "stages": [...]}
                ]
            }
        ]
    }

Each animation becomes one :class:`~slsb.models.Scene` whose stages form a
linear chain. The import is all-or-nothing.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from slsb.errors import ConsistencyError, LegacyFormatError, ProjectLoadError, UnknownSexError
from slsb.models import LegacyActorType, Node, Package, Position, Scene, Sex, Stage, normalize_tags
from slsb.races import HUMAN, lookup_legacy_race

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Intermediate schema
# ---------------------------------------------------------------------------


class LegacyStageEvent(BaseModel):
    id: str


class LegacyActor(BaseModel):
    type: str | None = None  # null or missing means male
    race: str | None = None
    stages: list[LegacyStageEvent]


class LegacyStageExtra(BaseModel):
    number: int
    timer: float = Field(ge=0.0, allow_inf_nan=False)


class LegacyAnimation(BaseModel):
    name: str
    creature_race: str | None = None
    tags: str | None = None
    stage: list[LegacyStageExtra] = Field(default_factory=list)
    actors: list[LegacyActor]


class LegacyDocument(BaseModel):
    name: str
    animations: list[LegacyAnimation]


def _format_loc(loc: tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def parse_legacy(data: object) -> LegacyDocument:
    """Validate a raw legacy document.

    Raises
    ------
    LegacyFormatError
        On the first missing or mistyped field, with its path.
    """
    try:
        return LegacyDocument.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise LegacyFormatError(first["msg"], path=_format_loc(first["loc"])) from None


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def _actor_identity(actor: LegacyActor, creature_race: str) -> tuple[Sex, str]:
    kind = (actor.type or LegacyActorType.MALE).lower()
    if kind in (LegacyActorType.MALE, LegacyActorType.TYPE):
        return Sex(male=True), HUMAN
    if kind == LegacyActorType.FEMALE:
        return Sex(female=True), HUMAN
    if kind == LegacyActorType.CREATURE_MALE:
        return Sex(male=True), lookup_legacy_race(actor.race or creature_race)
    if kind == LegacyActorType.CREATURE_FEMALE:
        return Sex(female=True), lookup_legacy_race(actor.race or creature_race)
    msg = f"Unrecognized gender: {kind}"
    raise UnknownSexError(msg)


def build_scene(animation: LegacyAnimation, index: int = 0) -> Scene:
    """Build one scene from a legacy animation entry."""
    scene = Scene(name=animation.name)
    if not animation.actors:
        msg = f"Animation {animation.name!r} has no actors"
        raise LegacyFormatError(msg, path=f"animations[{index}].actors")

    stage_count = len(animation.actors[0].stages)
    if stage_count == 0:
        msg = f"Scene {animation.name!r} has no stages"
        raise ConsistencyError(msg, scene_id=scene.id)
    actor_count = len(animation.actors)
    for _ in range(stage_count):
        scene.stages.append(Stage(positions=[Position() for _ in range(actor_count)]))

    for n, actor in enumerate(animation.actors):
        if len(actor.stages) != stage_count:
            msg = f"actor has {len(actor.stages)} stages, expected {stage_count}"
            raise LegacyFormatError(msg, path=f"animations[{index}].actors[{n}].stages")
        sex, race = _actor_identity(actor, animation.creature_race or "")
        for i, evt in enumerate(actor.stages):
            position = scene.stages[i].positions[n]
            position.event = [evt.id]
            position.sex = sex.model_copy()
            position.race = race

    tags = normalize_tags((animation.tags or "").split(","))
    for i, stage in enumerate(scene.stages):
        stage.tags = list(tags)
        for extra in animation.stage:
            if extra.number == i:
                stage.extra.fixed_len = extra.timer

    for position in scene.stages[-1].positions:
        position.extra.climax = True

    scene.root = scene.stages[0].id
    prev_id: str | None = None
    for stage in reversed(scene.stages):
        scene.graph[stage.id] = Node(dest=[prev_id] if prev_id else [])
        prev_id = stage.id
    return scene


def import_legacy(data: object) -> Package:
    """Convert a parsed legacy document into a current-version package."""
    document = parse_legacy(data)
    package = Package(name=document.name)
    for index, animation in enumerate(document.animations):
        scene = build_scene(animation, index)
        package.scenes[scene.id] = scene
        logger.debug("Converted animation %s -> scene %s", animation.name, scene.id)
    # Legacy documents predate versioning.
    package.version = 0
    package.migrate()
    logger.info("Loaded %d animations from legacy document %s", len(package.scenes), package.name)
    return package


def import_legacy_file(path: Path) -> Package:
    """Read a legacy JSON file and convert it."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"cannot read legacy file {path}: {exc}"
        raise ProjectLoadError(msg) from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"legacy file contains invalid JSON: {exc}"
        raise ProjectLoadError(msg) from None
    return import_legacy(data)
