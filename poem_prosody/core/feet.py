"""Metrical foot and line-length vocabulary shared by stress, meter and form code."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class FootType(str, Enum):
    """Recurring stress units. Members compare and hash like their string value."""

    IAMB = "iamb"
    TROCHEE = "trochee"
    ANAPEST = "anapest"
    DACTYL = "dactyl"
    SPONDEE = "spondee"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


class LineLength(str, Enum):
    MONOMETER = "monometer"
    DIMETER = "dimeter"
    TRIMETER = "trimeter"
    TETRAMETER = "tetrameter"
    PENTAMETER = "pentameter"
    HEXAMETER = "hexameter"
    HEPTAMETER = "heptameter"
    OCTAMETER = "octameter"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


# 0 = unstressed, 1 = stressed. Secondary stress is folded into 1 before use.
FOOT_PATTERNS: Dict[FootType, str] = {
    FootType.IAMB: "01",
    FootType.TROCHEE: "10",
    FootType.ANAPEST: "001",
    FootType.DACTYL: "100",
    FootType.SPONDEE: "11",
    FootType.UNKNOWN: "",
}

# Enumeration order used for scoring and tie-breaking.
SCORED_FEET: Tuple[FootType, ...] = (
    FootType.IAMB,
    FootType.TROCHEE,
    FootType.ANAPEST,
    FootType.DACTYL,
    FootType.SPONDEE,
)

FOOT_ADJECTIVES: Dict[FootType, str] = {
    FootType.IAMB: "iambic",
    FootType.TROCHEE: "trochaic",
    FootType.ANAPEST: "anapestic",
    FootType.DACTYL: "dactylic",
    FootType.SPONDEE: "spondaic",
    FootType.UNKNOWN: "irregular",
}

LINE_LENGTH_BY_FEET: Dict[int, LineLength] = {
    1: LineLength.MONOMETER,
    2: LineLength.DIMETER,
    3: LineLength.TRIMETER,
    4: LineLength.TETRAMETER,
    5: LineLength.PENTAMETER,
    6: LineLength.HEXAMETER,
    7: LineLength.HEPTAMETER,
    8: LineLength.OCTAMETER,
}

MIN_FEET = 1
MAX_FEET = 8


def coerce_foot(value: object) -> FootType:
    """Map a foot name (or member) to :class:`FootType`; anything else is unknown."""

    if isinstance(value, FootType):
        return value
    try:
        return FootType(str(value).strip().lower())
    except ValueError:
        return FootType.UNKNOWN


def to_binary_stress(pattern: str) -> str:
    """Fold secondary stress into primary stress."""

    return (pattern or "").replace("2", "1")


def ideal_cyclic_pattern(foot_type: object, length: int) -> str:
    """Repeat the foot's canonical unit and cut it to ``length`` characters."""

    unit = FOOT_PATTERNS.get(coerce_foot(foot_type), "")
    if not unit or length <= 0:
        return ""
    repeats = -(-length // len(unit))
    return (unit * repeats)[:length]


__all__ = [
    "FootType",
    "LineLength",
    "FOOT_PATTERNS",
    "FOOT_ADJECTIVES",
    "LINE_LENGTH_BY_FEET",
    "MAX_FEET",
    "MIN_FEET",
    "SCORED_FEET",
    "coerce_foot",
    "ideal_cyclic_pattern",
    "to_binary_stress",
]
