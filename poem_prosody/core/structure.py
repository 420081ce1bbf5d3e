"""Stanza-level structure: repeated lines, stanza similarity and sections."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from poem_prosody.utils.observability import get_logger

from .cmudict_loader import CMUDictLoader
from .feet import FootType
from .meter import string_similarity
from .preprocess import tokenize_words
from .stress import classify_foot, get_line_stress_pattern

CHORUS_SIMILARITY_THRESHOLD: float = 0.85
REFRAIN_SIMILARITY_THRESHOLD: float = 0.95
MIN_REFRAIN_OCCURRENCES: int = 2
MIN_REFRAIN_LENGTH: int = 3
BRIDGE_SIMILARITY_CEILING: float = 0.4
BRIDGE_POSITION_RANGE: Tuple[float, float] = (0.4, 0.8)
TEXT_WEIGHT: float = 0.7
METER_WEIGHT: float = 0.3
SHARED_FOOT_BONUS: float = 0.1

_COMPARISON_PUNCTUATION = re.compile(r"[.,!?;:'\"—–\-()\[\]{}…]")
_WHITESPACE_RUN = re.compile(r"\s+")

_logger = get_logger(__name__).bind(component="structure")


class SectionType(str, Enum):
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True)
class Refrain:
    """A line repeated in at least two stanzas.

    ``occurrences`` holds ``(stanza, line)`` index pairs.
    """

    text: str
    normalized_text: str
    occurrences: Tuple[Tuple[int, int], ...]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "normalized_text": self.normalized_text,
            "occurrences": [list(occurrence) for occurrence in self.occurrences],
        }


@dataclass(frozen=True)
class StanzaSimilarity:
    first: int
    second: int
    overall: float
    text: float
    meter: float
    line_count_match: bool
    foot_type_match: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "first": self.first,
            "second": self.second,
            "overall": self.overall,
            "text": self.text,
            "meter": self.meter,
            "line_count_match": self.line_count_match,
            "foot_type_match": self.foot_type_match,
        }


@dataclass(frozen=True)
class Section:
    section_type: SectionType
    stanza_indices: Tuple[int, ...]
    label: str
    confidence: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.section_type.value,
            "stanza_indices": list(self.stanza_indices),
            "label": self.label,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class StructureAnalysis:
    sections: Tuple[Section, ...]
    refrains: Tuple[Refrain, ...]
    similarities: Tuple[StanzaSimilarity, ...]
    has_verse_chorus_structure: bool
    structure_pattern: str
    summary: str

    def section_for_stanza(self, stanza_index: int) -> Optional[Section]:
        for section in self.sections:
            if stanza_index in section.stanza_indices:
                return section
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sections": [section.as_dict() for section in self.sections],
            "refrains": [refrain.as_dict() for refrain in self.refrains],
            "similarities": [similarity.as_dict() for similarity in self.similarities],
            "has_verse_chorus_structure": self.has_verse_chorus_structure,
            "structure_pattern": self.structure_pattern,
            "summary": self.summary,
        }


# Line and stanza similarity ------------------------------------------------------
def normalize_text_for_comparison(text: str) -> str:
    stripped = _COMPARISON_PUNCTUATION.sub("", (text or "").lower())
    return _WHITESPACE_RUN.sub(" ", stripped).strip()


def calculate_line_similarity(first: str, second: str) -> float:
    """Blend of edit-distance similarity (60%) and shared-word overlap (40%).

    Lines equal after normalisation score 1; a blank line scores 0 against
    anything.
    """

    left = normalize_text_for_comparison(first)
    right = normalize_text_for_comparison(second)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0

    words_left = {word.lower() for word in tokenize_words(left)}
    words_right = {word.lower() for word in tokenize_words(right)}
    union = words_left | words_right
    overlap = len(words_left & words_right) / len(union) if union else 0.0
    return string_similarity(left, right) * 0.6 + overlap * 0.4


def calculate_stanza_text_similarity(first: Sequence[str], second: Sequence[str]) -> float:
    if not first or not second:
        return 0.0

    shorter = min(len(first), len(second))
    line_count_ratio = shorter / max(len(first), len(second))
    average = sum(calculate_line_similarity(first[i], second[i]) for i in range(shorter)) / shorter
    return average * (0.7 + 0.3 * line_count_ratio)


def _stress_patterns(stanza: Sequence[str], cmu_loader: Optional[CMUDictLoader]) -> List[str]:
    return [get_line_stress_pattern(tokenize_words(line), cmu_loader) for line in stanza]


def _stanza_foot(patterns: Sequence[str]) -> FootType:
    counts = Counter(classify_foot(pattern) for pattern in patterns)
    dominant = FootType.UNKNOWN
    best = 0
    for foot, count in counts.items():
        if foot != FootType.UNKNOWN and count > best:
            best = count
            dominant = foot
    return dominant


def _meter_similarity(first: Sequence[str], second: Sequence[str]) -> Tuple[float, bool]:
    if not first or not second:
        return 0.0, False

    shorter = min(len(first), len(second))
    average = sum(string_similarity(first[i], second[i]) for i in range(shorter)) / shorter
    foot = _stanza_foot(first)
    shared_foot = foot != FootType.UNKNOWN and foot == _stanza_foot(second)
    bonus = SHARED_FOOT_BONUS if shared_foot else 0.0
    return min(1.0, average + bonus), shared_foot


def calculate_meter_similarity(
    first: Sequence[str], second: Sequence[str], cmu_loader: Optional[CMUDictLoader] = None
) -> float:
    """Mean similarity of the line stress strings, plus 0.1 for a shared foot."""

    similarity, _ = _meter_similarity(
        _stress_patterns(first, cmu_loader), _stress_patterns(second, cmu_loader)
    )
    return similarity


def build_similarity_matrix(
    stanzas: Sequence[Sequence[str]], cmu_loader: Optional[CMUDictLoader] = None
) -> List[StanzaSimilarity]:
    """Compare every stanza pair ``(i, j)`` with ``i < j``.

    Overall similarity weighs text 70% and meter 30%.
    """

    patterns = [_stress_patterns(stanza, cmu_loader) for stanza in stanzas]
    similarities: List[StanzaSimilarity] = []
    for i in range(len(stanzas)):
        for j in range(i + 1, len(stanzas)):
            text = calculate_stanza_text_similarity(stanzas[i], stanzas[j])
            meter, shared_foot = _meter_similarity(patterns[i], patterns[j])
            similarities.append(
                StanzaSimilarity(
                    first=i,
                    second=j,
                    overall=text * TEXT_WEIGHT + meter * METER_WEIGHT,
                    text=text,
                    meter=meter,
                    line_count_match=len(stanzas[i]) == len(stanzas[j]),
                    foot_type_match=shared_foot,
                )
            )
    return similarities


# Refrains ----------------------------------------------------------------------
def detect_refrains(stanzas: Optional[Sequence[Sequence[str]]]) -> List[Refrain]:
    """Lines that recur, exactly or almost, in at least two stanzas.

    Exact repeats are matched after normalisation. A line that is not an
    exact repeat but reaches 0.95 line similarity with lines of other
    stanzas forms a near-match refrain. Lines shorter than three characters
    are ignored.
    """

    stanzas = stanzas or ()
    exact: Dict[str, Tuple[str, List[Tuple[int, int]]]] = {}
    for stanza_index, stanza in enumerate(stanzas):
        for line_index, line in enumerate(stanza):
            normalized = normalize_text_for_comparison(line)
            if len(normalized) < MIN_REFRAIN_LENGTH:
                continue
            exact.setdefault(normalized, (line, []))[1].append((stanza_index, line_index))

    refrains: List[Refrain] = []
    for normalized, (text, occurrences) in exact.items():
        if len({stanza for stanza, _ in occurrences}) >= MIN_REFRAIN_OCCURRENCES:
            refrains.append(Refrain(text=text, normalized_text=normalized, occurrences=tuple(occurrences)))

    known: Set[str] = {refrain.normalized_text for refrain in refrains}
    processed: Set[str] = set()
    for stanza_index, stanza in enumerate(stanzas):
        for line_index, line in enumerate(stanza):
            normalized = normalize_text_for_comparison(line)
            if normalized in processed or len(normalized) < MIN_REFRAIN_LENGTH:
                continue
            processed.add(normalized)

            similar = [(stanza_index, line_index)]
            for other_stanza, others in enumerate(stanzas):
                for other_line, other in enumerate(others):
                    if (other_stanza, other_line) == (stanza_index, line_index):
                        continue
                    if normalize_text_for_comparison(other) == normalized:
                        continue
                    if calculate_line_similarity(line, other) >= REFRAIN_SIMILARITY_THRESHOLD:
                        similar.append((other_stanza, other_line))

            spans = len({stanza for stanza, _ in similar})
            if spans >= MIN_REFRAIN_OCCURRENCES and normalized not in known:
                refrains.append(Refrain(text=line, normalized_text=normalized, occurrences=tuple(similar)))
                known.add(normalized)

    if refrains:
        _logger.debug(
            "Detected refrains",
            context={"refrains": [refrain.normalized_text for refrain in refrains]},
        )
    return refrains


# Sections ----------------------------------------------------------------------
def _chorus_groups(similarities: Sequence[StanzaSimilarity]) -> List[Tuple[Tuple[int, ...], float]]:
    groups: List[List[Any]] = []
    for similarity in similarities:
        if similarity.overall < CHORUS_SIMILARITY_THRESHOLD:
            continue
        pair = {similarity.first, similarity.second}
        for group in groups:
            if group[0] & pair:
                group[0].update(pair)
                # Each newly joined pair carries half the weight.
                group[1] = (group[1] + similarity.overall) / 2
                break
        else:
            groups.append([pair, similarity.overall])
    return [(tuple(sorted(members)), score) for members, score in groups]


def _average_similarity(index: int, similarities: Sequence[StanzaSimilarity]) -> float:
    relevant = [s.overall for s in similarities if index in (s.first, s.second)]
    if not relevant:
        return 0.5
    return sum(relevant) / len(relevant)


def _refrain_lines(stanza_index: int, line_count: int, refrains: Sequence[Refrain]) -> int:
    located = {occurrence for refrain in refrains for occurrence in refrain.occurrences}
    return sum(1 for line_index in range(line_count) if (stanza_index, line_index) in located)


def classify_sections(
    stanzas: Sequence[Sequence[str]],
    similarities: Sequence[StanzaSimilarity],
    refrains: Sequence[Refrain],
) -> List[Section]:
    """Label stanzas as chorus, bridge or verse.

    Groups of stanzas at least 0.85 similar are one chorus. A stanza whose
    lines are mostly refrains is a chorus on its own. A stanza unlike the
    rest (mean similarity under 0.4) in the 40-80% stretch of a poem of
    three or more stanzas is a bridge. Everything else is a numbered verse.
    """

    if not stanzas:
        return []

    sections: List[Section] = []
    assigned = [False] * len(stanzas)

    for indices, confidence in _chorus_groups(similarities):
        sections.append(Section(SectionType.CHORUS, indices, "Chorus", confidence))
        for index in indices:
            assigned[index] = True

    for index, stanza in enumerate(stanzas):
        if assigned[index] or len(stanza) < 2:
            continue
        ratio = _refrain_lines(index, len(stanza), refrains) / len(stanza)
        if ratio > 0.5:
            sections.append(Section(SectionType.CHORUS, (index,), "Chorus", ratio))
            assigned[index] = True

    if len(stanzas) > 2:
        lower, upper = BRIDGE_POSITION_RANGE
        for index in range(len(stanzas)):
            if assigned[index]:
                continue
            average = _average_similarity(index, similarities)
            position = index / len(stanzas)
            if average < BRIDGE_SIMILARITY_CEILING and lower < position < upper:
                sections.append(Section(SectionType.BRIDGE, (index,), "Bridge", 1.0 - average))
                assigned[index] = True

    remaining = [index for index in range(len(stanzas)) if not assigned[index]]
    for index in remaining:
        closest = max(
            (
                s.overall
                for s in similarities
                if index in (s.first, s.second) and s.first in remaining and s.second in remaining
            ),
            default=0.0,
        )
        sections.append(
            Section(SectionType.VERSE, (index,), "Verse", closest if closest > 0 else 0.5)
        )

    sections.sort(key=lambda section: section.stanza_indices[0])
    numbered: List[Section] = []
    verse_number = 0
    for section in sections:
        if section.section_type == SectionType.VERSE:
            verse_number += 1
            section = Section(
                section.section_type,
                section.stanza_indices,
                f"Verse {verse_number}",
                section.confidence,
            )
        numbered.append(section)
    return numbered


def generate_structure_pattern(sections: Sequence[Section], stanza_count: int) -> str:
    """One letter per stanza; every chorus shares a letter, other stanzas get their own."""

    by_stanza = {index: section for section in sections for index in section.stanza_indices}
    letters: List[str] = []
    chorus_letter: Optional[str] = None
    next_letter = "A"

    for index in range(stanza_count):
        section = by_stanza.get(index)
        if section is None:
            letters.append("?")
            continue
        if section.section_type == SectionType.CHORUS and chorus_letter is not None:
            letters.append(chorus_letter)
            continue

        letter = next_letter
        next_letter = chr(ord(next_letter) + 1)
        if section.section_type == SectionType.CHORUS:
            chorus_letter = letter
        letters.append(letter)
    return "".join(letters)


def _summarize(sections: Sequence[Section], refrains: Sequence[Refrain], verse_chorus: bool) -> str:
    counts = Counter(section.section_type for section in sections)
    verses = counts[SectionType.VERSE]
    choruses = counts[SectionType.CHORUS]
    bridges = counts[SectionType.BRIDGE]

    parts: List[str] = []
    if verse_chorus:
        parts.append("Verse/chorus structure detected")
    elif verses:
        parts.append("Verse-based structure")

    if verses:
        parts.append(f"{verses} verse{'s' if verses > 1 else ''}")
    if choruses:
        parts.append(f"{choruses} chorus section{'s' if choruses > 1 else ''}")
    if bridges:
        parts.append(f"{bridges} bridge")
    if refrains:
        parts.append(f"{len(refrains)} refrain line{'s' if len(refrains) > 1 else ''}")
    return ", ".join(parts) or "No clear structure detected"


def analyze_structure(
    stanzas: Optional[Sequence[Sequence[str]]], cmu_loader: Optional[CMUDictLoader] = None
) -> StructureAnalysis:
    if not stanzas:
        return StructureAnalysis(
            sections=(),
            refrains=(),
            similarities=(),
            has_verse_chorus_structure=False,
            structure_pattern="",
            summary="No stanzas to analyze",
        )

    if len(stanzas) == 1:
        return StructureAnalysis(
            sections=(Section(SectionType.VERSE, (0,), "Verse 1", 1.0),),
            refrains=(),
            similarities=(),
            has_verse_chorus_structure=False,
            structure_pattern="A",
            summary="Single stanza poem",
        )

    similarities = build_similarity_matrix(stanzas, cmu_loader)
    refrains = detect_refrains(stanzas)
    sections = classify_sections(stanzas, similarities, refrains)

    types = {section.section_type for section in sections}
    verse_chorus = SectionType.CHORUS in types and SectionType.VERSE in types
    analysis = StructureAnalysis(
        sections=tuple(sections),
        refrains=tuple(refrains),
        similarities=tuple(similarities),
        has_verse_chorus_structure=verse_chorus,
        structure_pattern=generate_structure_pattern(sections, len(stanzas)),
        summary=_summarize(sections, refrains, verse_chorus),
    )
    _logger.debug(
        "Analysed structure",
        context={"pattern": analysis.structure_pattern, "summary": analysis.summary},
    )
    return analysis


__all__ = [
    "Refrain",
    "Section",
    "SectionType",
    "StanzaSimilarity",
    "StructureAnalysis",
    "analyze_structure",
    "build_similarity_matrix",
    "calculate_line_similarity",
    "calculate_meter_similarity",
    "calculate_stanza_text_similarity",
    "classify_sections",
    "detect_refrains",
    "generate_structure_pattern",
    "normalize_text_for_comparison",
]
