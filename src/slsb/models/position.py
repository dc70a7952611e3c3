"""Per-actor position models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slsb.codec import BOOL, MILLIS, TEXT, SequenceOf
from slsb.races import HUMAN

if TYPE_CHECKING:
    from slsb.codec import ByteWriter

BLANK_EVENT = "__BLANK__"
DEFAULT_EVENT = "__DEFAULT__"
RESERVED_EVENTS = frozenset({BLANK_EVENT, DEFAULT_EVENT})

_EVENTS = SequenceOf(TEXT)


class Sex(BaseModel):
    """Sex flags for an actor slot. The flags are independent."""

    male: bool = False
    female: bool = False
    futa: bool = False

    def byte_size(self) -> int:
        return 3 * BOOL.size(True)

    def write_bytes(self, writer: ByteWriter) -> None:
        BOOL.write(self.male, writer)
        BOOL.write(self.female, writer)
        BOOL.write(self.futa, writer)


class Offset(BaseModel):
    """Placement override applied to an actor at a stage."""

    model_config = ConfigDict(allow_inf_nan=False)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 0.0

    def byte_size(self) -> int:
        return 4 * MILLIS.size(0.0)

    def write_bytes(self, writer: ByteWriter) -> None:
        for value in (self.x, self.y, self.z, self.r):
            MILLIS.write(value, writer)


class PositionExtra(BaseModel):
    climax: bool = False


class Position(BaseModel):
    """An actor slot: which events it plays and who may fill it."""

    event: list[str] = Field(default_factory=lambda: [BLANK_EVENT], min_length=1)
    sex: Sex = Field(default_factory=Sex)
    race: str = HUMAN
    extra: PositionExtra = Field(default_factory=PositionExtra)
    anim_obj: str = ""
    offset: Offset = Field(default_factory=Offset)

    @field_validator("event", mode="before")
    @classmethod
    def _wrap_single_event(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value

    @property
    def anim_objects(self) -> list[str]:
        """Animation objects from the comma-separated field, empties dropped."""
        return [obj for obj in self.anim_obj.split(",") if obj]

    def template(self) -> Position:
        """Return a scene-level template carrying this position's race and sex."""
        return Position(event=[DEFAULT_EVENT], sex=self.sex.model_copy(), race=self.race)

    def byte_size(self) -> int:
        return (
            _EVENTS.size(self.event)
            + TEXT.size(self.race)
            + self.sex.byte_size()
            + BOOL.size(self.extra.climax)
            + TEXT.size(self.anim_obj)
            + self.offset.byte_size()
        )

    def write_bytes(self, writer: ByteWriter) -> None:
        _EVENTS.write(self.event, writer)
        TEXT.write(self.race, writer)
        self.sex.write_bytes(writer)
        BOOL.write(self.extra.climax, writer)
        TEXT.write(self.anim_obj, writer)
        self.offset.write_bytes(writer)
