"""Per-line stress extraction and metrical foot classification."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger
from poem_prosody.utils.syllables import estimate_stress_for_unknown_word

from .cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER
from .feet import (
    FOOT_ADJECTIVES,
    FOOT_PATTERNS,
    LINE_LENGTH_BY_FEET,
    SCORED_FEET,
    FootType,
    coerce_foot,
    to_binary_stress,
)

FOOT_MATCH_THRESHOLD: float = 0.70
DOMINANT_FOOT_SHARE: float = 0.40
REGULAR_DEVIATION_RATE: float = 0.10

_TWO_SYLLABLE_FEET: Dict[str, FootType] = {
    "01": FootType.IAMB,
    "10": FootType.TROCHEE,
    "11": FootType.SPONDEE,
    "00": FootType.UNKNOWN,
}

_logger = get_logger(__name__).bind(component="stress")


@dataclass(frozen=True)
class StressAnalysis:
    """Stress profile of a single line."""

    pattern: str
    syllable_stresses: Tuple[str, ...]
    foot_type: FootType
    deviations: Tuple[int, ...]

    @classmethod
    def empty(cls) -> "StressAnalysis":
        return cls(pattern="", syllable_stresses=(), foot_type=FootType.UNKNOWN, deviations=())

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "syllable_stresses": list(self.syllable_stresses),
            "foot_type": self.foot_type.value,
            "deviations": list(self.deviations),
        }


def _resolve_loader(cmu_loader: Optional[CMUDictLoader]) -> CMUDictLoader:
    return cmu_loader if cmu_loader is not None else DEFAULT_CMU_LOADER


def get_word_stress_pattern(word: str, cmu_loader: Optional[CMUDictLoader] = None) -> str:
    """Dictionary stress for ``word``, falling back to the orthographic estimate."""

    if not word or not word.strip():
        return ""

    looked_up = _resolve_loader(cmu_loader).stress_pattern_for(word.strip())
    if looked_up is not None:
        return looked_up

    estimated = estimate_stress_for_unknown_word(word)
    _logger.debug("Estimated stress for unknown word", context={"word": word, "pattern": estimated})
    return estimated


def get_line_stress_pattern(
    words: Iterable[str], cmu_loader: Optional[CMUDictLoader] = None
) -> str:
    loader = _resolve_loader(cmu_loader)
    return "".join(get_word_stress_pattern(word, loader) for word in words or ())


def _cyclic_match(binary_pattern: str, foot_pattern: str) -> float:
    if not binary_pattern or not foot_pattern:
        return 0.0
    foot_length = len(foot_pattern)
    matches = sum(
        1
        for index, char in enumerate(binary_pattern)
        if char == foot_pattern[index % foot_length]
    )
    return matches / len(binary_pattern)


def classify_foot(pattern: str) -> FootType:
    """Classify ``pattern`` as the foot whose repetition it matches best.

    Two-syllable patterns are a table lookup. Longer patterns are scored
    position by position against each foot repeated cyclically; the best
    foot wins only when it matches at least 70% of positions.
    """

    binary = to_binary_stress(pattern)
    if len(binary) < 2:
        return FootType.UNKNOWN
    if len(binary) == 2:
        return _TWO_SYLLABLE_FEET.get(binary, FootType.UNKNOWN)

    best_foot = FootType.UNKNOWN
    best_score = 0.0
    for foot in SCORED_FEET:
        score = _cyclic_match(binary, FOOT_PATTERNS[foot])
        if score > best_score:
            best_score = score
            best_foot = foot

    result = best_foot if best_score >= FOOT_MATCH_THRESHOLD else FootType.UNKNOWN
    _logger.debug(
        "Classified foot",
        context={"pattern": binary, "foot": result.value, "score": round(best_score, 3)},
    )
    return result


def detect_deviations(pattern: str, foot_type: object) -> Tuple[int, ...]:
    """Positions where ``pattern`` disagrees with the foot repeated cyclically."""

    foot_pattern = FOOT_PATTERNS[coerce_foot(foot_type)]
    if not pattern or not foot_pattern:
        return ()

    binary = to_binary_stress(pattern)
    foot_length = len(foot_pattern)
    return tuple(
        index
        for index, char in enumerate(binary)
        if char != foot_pattern[index % foot_length]
    )


def analyze_line_stress(
    words: Sequence[str], cmu_loader: Optional[CMUDictLoader] = None
) -> StressAnalysis:
    if not words:
        return StressAnalysis.empty()

    pattern = get_line_stress_pattern(words, cmu_loader)
    syllable_stresses = tuple(char if char in "012" else "0" for char in pattern)
    foot_type = classify_foot(pattern)

    return StressAnalysis(
        pattern=pattern,
        syllable_stresses=syllable_stresses,
        foot_type=foot_type,
        deviations=detect_deviations(pattern, foot_type),
    )


def analyze_poem_stress(
    lines: Iterable[Sequence[str]], cmu_loader: Optional[CMUDictLoader] = None
) -> List[StressAnalysis]:
    loader = _resolve_loader(cmu_loader)
    return [analyze_line_stress(words, loader) for words in lines or ()]


def get_dominant_foot(analyses: Sequence[StressAnalysis]) -> FootType:
    """Most common known foot, provided it covers at least 40% of the lines."""

    if not analyses:
        return FootType.UNKNOWN

    counts = Counter(
        analysis.foot_type for analysis in analyses if analysis.foot_type != FootType.UNKNOWN
    )
    if not counts:
        return FootType.UNKNOWN

    # Counter preserves first-seen order, so ties go to the earliest line.
    dominant, count = max(counts.items(), key=lambda item: item[1])
    if count < len(analyses) * DOMINANT_FOOT_SHARE:
        return FootType.UNKNOWN
    return dominant


# Utilities -----------------------------------------------------------------
def get_meter_name(foot_type: object, feet_count: int) -> str:
    """Identifier such as ``"iambic_pentameter"``; ``"irregular"`` for unknown feet."""

    foot = coerce_foot(foot_type)
    if foot == FootType.UNKNOWN:
        return "irregular"
    length = LINE_LENGTH_BY_FEET.get(feet_count)
    length_name = length.value if length is not None else f"{feet_count}-foot"
    return f"{FOOT_ADJECTIVES[foot]}_{length_name}"


def count_feet(pattern: str, foot_type: object) -> int:
    foot_pattern = FOOT_PATTERNS[coerce_foot(foot_type)]
    unit = len(foot_pattern) or 2
    return math.ceil(len(pattern or "") / unit)


def calculate_confidence(pattern: str, foot_type: object) -> float:
    foot = coerce_foot(foot_type)
    if not pattern or foot == FootType.UNKNOWN:
        return 0.0
    return _cyclic_match(to_binary_stress(pattern), FOOT_PATTERNS[foot])


def is_regular_pattern(pattern: str) -> bool:
    """True when at most 10% of syllables deviate from the classified foot."""

    if not pattern or len(pattern) < 2:
        return True

    foot = classify_foot(pattern)
    if foot == FootType.UNKNOWN:
        return False
    return len(detect_deviations(pattern, foot)) / len(pattern) <= REGULAR_DEVIATION_RATE


__all__ = [
    "DOMINANT_FOOT_SHARE",
    "FOOT_MATCH_THRESHOLD",
    "StressAnalysis",
    "analyze_line_stress",
    "analyze_poem_stress",
    "calculate_confidence",
    "classify_foot",
    "count_feet",
    "detect_deviations",
    "get_dominant_foot",
    "get_line_stress_pattern",
    "get_meter_name",
    "get_word_stress_pattern",
    "is_regular_pattern",
]
