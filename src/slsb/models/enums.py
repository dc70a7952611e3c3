"""Enumerations used throughout slsb."""

from enum import StrEnum


class LegacyActorType(StrEnum):
    MALE = "male"
    FEMALE = "female"
    CREATURE_MALE = "creaturemale"
    CREATURE_FEMALE = "creaturefemale"
    # Some legacy exporters wrote the field name itself as the value.
    TYPE = "type"


class LineKind(StrEnum):
    BASIC = "b"
    CHAIN_START = "s"
    CHAIN_NEXT = "+"
