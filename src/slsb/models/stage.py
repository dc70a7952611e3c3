"""Stage model - one step of a scene."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from slsb.codec import MILLIS, MODEL, TEXT, SequenceOf
from slsb.models.ids import new_id
from slsb.models.position import Position

if TYPE_CHECKING:
    from slsb.codec import ByteWriter

_POSITIONS = SequenceOf(MODEL)
_TAGS = SequenceOf(TEXT)


class StageExtra(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False, validate_assignment=True)

    fixed_len: float = Field(default=0.0, ge=0.0)  # seconds, 0 = not fixed
    nav_text: str = ""


class Stage(BaseModel):
    """A single animation step with one position per actor slot."""

    id: str = Field(default_factory=new_id)
    positions: list[Position] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    extra: StageExtra = Field(default_factory=StageExtra)

    @property
    def is_fixed_length(self) -> bool:
        return self.extra.fixed_len > 0

    def byte_size(self) -> int:
        return (
            TEXT.size(self.id)
            + _POSITIONS.size(self.positions)
            + _TAGS.size(self.tags)
            + MILLIS.size(self.extra.fixed_len)
            + TEXT.size(self.extra.nav_text)
        )

    def write_bytes(self, writer: ByteWriter) -> None:
        TEXT.write(self.id, writer)
        _POSITIONS.write(self.positions, writer)
        _TAGS.write(self.tags, writer)
        MILLIS.write(self.extra.fixed_len, writer)
        TEXT.write(self.extra.nav_text, writer)
