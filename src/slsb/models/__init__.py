"""slsb data models - pydantic entities with their binary layouts."""

from slsb.models.enums import LegacyActorType, LineKind
from slsb.models.ids import new_id, new_prefix
from slsb.models.package import CURRENT_VERSION, PROJECT_SUFFIX, Package
from slsb.models.position import (
    BLANK_EVENT,
    DEFAULT_EVENT,
    RESERVED_EVENTS,
    Offset,
    Position,
    PositionExtra,
    Sex,
)
from slsb.models.scene import Node, Scene, normalize_tags
from slsb.models.stage import Stage, StageExtra

__all__ = [
    "BLANK_EVENT",
    "CURRENT_VERSION",
    "DEFAULT_EVENT",
    "LegacyActorType",
    "LineKind",
    "Node",
    "Offset",
    "PROJECT_SUFFIX",
    "Package",
    "Position",
    "PositionExtra",
    "RESERVED_EVENTS",
    "Scene",
    "Sex",
    "Stage",
    "StageExtra",
    "new_id",
    "new_prefix",
    "normalize_tags",
]
