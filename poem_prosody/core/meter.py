"""Meter detection by fuzzy matching stress strings against canonical meters.

Unlike foot classification in :mod:`poem_prosody.core.stress`, which only
counts substitutions, the scorer here uses edit distance so a line with a
dropped or extra syllable still lands on the meter it approximates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger

from .feet import (
    FOOT_ADJECTIVES,
    FOOT_PATTERNS,
    LINE_LENGTH_BY_FEET,
    MAX_FEET,
    MIN_FEET,
    SCORED_FEET,
    FootType,
    LineLength,
    coerce_foot,
    ideal_cyclic_pattern,
    to_binary_stress,
)

SHORT_PATTERN_LENGTH: int = 4
SHORT_PATTERN_DAMPING: float = 0.7
MULTI_LINE_CONSISTENCY_WEIGHT: float = 0.5

ALL_FOOT_TYPES: Tuple[FootType, ...] = tuple(FootType)
ALL_LINE_LENGTHS: Tuple[LineLength, ...] = tuple(LineLength)

_logger = get_logger(__name__).bind(component="meter")


@dataclass(frozen=True)
class MeterMatch:
    """A candidate meter and how closely the observed pattern fits it."""

    meter: str
    score: float
    pattern: str
    foot_type: FootType
    feet_count: int


@dataclass(frozen=True)
class MeterAnalysisResult:
    pattern: str
    foot_type: FootType
    line_length: LineLength
    feet_per_line: int
    meter_name: str
    regularity: float
    confidence: float

    @classmethod
    def irregular(cls, pattern: str = "") -> "MeterAnalysisResult":
        return cls(
            pattern=pattern,
            foot_type=FootType.UNKNOWN,
            line_length=LineLength.MONOMETER,
            feet_per_line=0,
            meter_name="irregular",
            regularity=0.0,
            confidence=0.0,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "foot_type": self.foot_type.value,
            "line_length": self.line_length.value,
            "feet_per_line": self.feet_per_line,
            "meter_name": self.meter_name,
            "regularity": self.regularity,
            "confidence": self.confidence,
        }


# Edit distance ---------------------------------------------------------------
def levenshtein_distance(a: str, b: str) -> int:
    """Number of single-character insertions, deletions and substitutions."""

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """``1 - distance / longest length``; identical strings (even empty) score 1."""

    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


# Line length -----------------------------------------------------------------
def classify_line_length(syllable_count: int, foot_type: object = FootType.IAMB) -> LineLength:
    """Name the line length for ``syllable_count`` syllables of ``foot_type``.

    Triple feet (anapest, dactyl) take three syllables, everything else two.
    The foot count is rounded and clamped to monometer..octameter.
    """

    if syllable_count <= 0:
        return LineLength.MONOMETER

    syllables_per_foot = len(FOOT_PATTERNS[coerce_foot(foot_type)]) or 2
    # Halves round up: five iambic syllables make a trimeter.
    feet = math.floor(syllable_count / syllables_per_foot + 0.5)
    return LINE_LENGTH_BY_FEET[max(MIN_FEET, min(MAX_FEET, feet))]


def get_feet_from_line_length(line_length: object) -> int:
    for feet, name in LINE_LENGTH_BY_FEET.items():
        if name.value == str(line_length).strip().lower():
            return feet
    return 4


# Regularity ------------------------------------------------------------------
def calculate_regularity(pattern: str, foot_type: object) -> float:
    """Similarity between ``pattern`` and the foot repeated to the same length."""

    if not pattern:
        return 0.0
    ideal = ideal_cyclic_pattern(foot_type, len(pattern))
    if not ideal:
        return 0.0
    return string_similarity(pattern, ideal)


def find_deviations(pattern: str, foot_type: object) -> Tuple[int, ...]:
    if not pattern:
        return ()
    ideal = ideal_cyclic_pattern(foot_type, len(pattern))
    if not ideal:
        return ()
    return tuple(index for index, char in enumerate(pattern) if char != ideal[index])


# Matching --------------------------------------------------------------------
def create_meter_pattern(foot_type: object, feet_count: int) -> str:
    foot = coerce_foot(foot_type)
    unit = FOOT_PATTERNS[foot] or FOOT_PATTERNS[FootType.IAMB]
    return unit * max(0, feet_count)


def foot_type_to_adjective(foot_type: object) -> str:
    return FOOT_ADJECTIVES[coerce_foot(foot_type)]


def _meter_label(foot: FootType, feet_count: int) -> str:
    return f"{FOOT_ADJECTIVES[foot]} {LINE_LENGTH_BY_FEET[feet_count].value}"


def find_best_meter_match(pattern: str) -> List[MeterMatch]:
    """Score ``pattern`` against every foot type from monometer to octameter.

    Candidates come back best first; equal scores keep enumeration order
    (feet in iamb, trochee, anapest, dactyl, spondee order, then length).
    """

    if not pattern:
        return []

    matches: List[MeterMatch] = []
    for foot in SCORED_FEET:
        for feet_count in range(MIN_FEET, MAX_FEET + 1):
            ideal = create_meter_pattern(foot, feet_count)
            matches.append(
                MeterMatch(
                    meter=_meter_label(foot, feet_count),
                    score=string_similarity(pattern, ideal),
                    pattern=ideal,
                    foot_type=foot,
                    feet_count=feet_count,
                )
            )

    matches.sort(key=lambda match: match.score, reverse=True)
    return matches


def detect_meter(pattern: str) -> MeterAnalysisResult:
    """Best-fit named meter for a single line's stress string."""

    normalized = to_binary_stress(pattern)
    if not normalized:
        return MeterAnalysisResult.irregular()

    matches = find_best_meter_match(normalized)
    best = matches[0]
    regularity = calculate_regularity(normalized, best.foot_type)

    coverage = min(1.0, len(normalized) / max(1, len(best.pattern)))
    confidence = regularity * coverage
    if len(normalized) < SHORT_PATTERN_LENGTH:
        confidence *= SHORT_PATTERN_DAMPING

    result = MeterAnalysisResult(
        pattern=normalized,
        foot_type=best.foot_type,
        line_length=LINE_LENGTH_BY_FEET[best.feet_count],
        feet_per_line=best.feet_count,
        meter_name=best.meter,
        regularity=regularity,
        confidence=max(0.0, min(1.0, confidence)),
    )
    _logger.debug(
        "Detected meter",
        context={"pattern": normalized, "meter": best.meter, "score": round(best.score, 3)},
    )
    return result


def analyze_multi_line_meter(patterns: Sequence[str]) -> MeterAnalysisResult:
    """Dominant meter across lines.

    The most frequent meter name wins (earliest line on ties). Regularity
    blends how many lines agree with the average regularity of those lines;
    confidence is their average confidence scaled by the share that agrees.
    """

    if not patterns:
        return detect_meter("")

    analyses = [detect_meter(pattern) for pattern in patterns]

    counts: Dict[str, int] = {}
    for analysis in analyses:
        counts[analysis.meter_name] = counts.get(analysis.meter_name, 0) + 1
    dominant_name = max(counts, key=lambda name: counts[name])

    agreeing = [analysis for analysis in analyses if analysis.meter_name == dominant_name]
    consistency = len(agreeing) / len(analyses)
    avg_regularity = sum(item.regularity for item in agreeing) / len(agreeing)
    avg_confidence = sum(item.confidence for item in agreeing) / len(agreeing)

    regularity = (
        consistency * MULTI_LINE_CONSISTENCY_WEIGHT
        + avg_regularity * (1.0 - MULTI_LINE_CONSISTENCY_WEIGHT)
    )
    _logger.debug(
        "Dominant meter across lines",
        context={"meter": dominant_name, "agreeing": len(agreeing), "lines": len(analyses)},
    )
    return replace(
        agreeing[0],
        regularity=regularity,
        confidence=avg_confidence * consistency,
    )


def parse_meter_name(meter_name: str) -> Optional[Tuple[FootType, LineLength]]:
    """Split ``"iambic pentameter"`` into its foot and line length."""

    lowered = (meter_name or "").strip().lower()

    foot = FootType.UNKNOWN
    for candidate, adjective in FOOT_ADJECTIVES.items():
        if candidate != FootType.UNKNOWN and adjective in lowered:
            foot = candidate
            break

    line_length = LineLength.TETRAMETER
    for candidate in ALL_LINE_LENGTHS:
        if candidate.value in lowered:
            line_length = candidate
            break

    if foot == FootType.UNKNOWN and "irregular" not in lowered:
        return None
    return foot, line_length


__all__ = [
    "ALL_FOOT_TYPES",
    "ALL_LINE_LENGTHS",
    "MeterAnalysisResult",
    "MeterMatch",
    "analyze_multi_line_meter",
    "calculate_regularity",
    "classify_line_length",
    "create_meter_pattern",
    "detect_meter",
    "find_best_meter_match",
    "find_deviations",
    "foot_type_to_adjective",
    "get_feet_from_line_length",
    "levenshtein_distance",
    "parse_meter_name",
    "string_similarity",
]
