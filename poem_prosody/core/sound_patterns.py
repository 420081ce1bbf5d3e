"""Alliteration, assonance and consonance inside individual lines.

Words are read through the pronouncing dictionary; words it does not know
take no part in any pattern.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger

from .cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER, base_phoneme, is_vowel
from .rhyme import tokenize_line

COMMON_CONSONANTS = frozenset({"T", "N", "S", "R", "L", "D"})
COMMON_CONSONANT_MIN_WORDS: int = 3
COMMON_CONSONANT_DAMPING: float = 0.7
PATTERNS_PER_LINE_FOR_FULL_DENSITY: int = 5
TOP_SOUND_COUNT: int = 3

_logger = get_logger(__name__).bind(component="sound_patterns")


class SoundPatternType(str, Enum):
    ALLITERATION = "alliteration"
    ASSONANCE = "assonance"
    CONSONANCE = "consonance"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True)
class SoundPatternOccurrence:
    """One repeated sound shared by two or more words of a line."""

    pattern_type: SoundPatternType
    sound: str
    words: Tuple[str, ...]
    positions: Tuple[int, ...]
    line_number: int
    strength: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.pattern_type.value,
            "sound": self.sound,
            "words": list(self.words),
            "positions": list(self.positions),
            "line_number": self.line_number,
            "strength": self.strength,
        }


@dataclass(frozen=True)
class LineSoundPatterns:
    line_number: int
    text: str
    alliterations: Tuple[SoundPatternOccurrence, ...]
    assonances: Tuple[SoundPatternOccurrence, ...]
    consonances: Tuple[SoundPatternOccurrence, ...]

    @property
    def all_patterns(self) -> Tuple[SoundPatternOccurrence, ...]:
        return self.alliterations + self.assonances + self.consonances

    def strongest_pattern(self) -> Optional[SoundPatternOccurrence]:
        patterns = self.all_patterns
        if not patterns:
            return None
        return max(patterns, key=lambda pattern: pattern.strength)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "text": self.text,
            "alliterations": [pattern.as_dict() for pattern in self.alliterations],
            "assonances": [pattern.as_dict() for pattern in self.assonances],
            "consonances": [pattern.as_dict() for pattern in self.consonances],
        }


@dataclass(frozen=True)
class SoundPatternSummary:
    alliteration_count: int = 0
    assonance_count: int = 0
    consonance_count: int = 0
    density: float = 0.0
    top_alliterative_sounds: Tuple[str, ...] = ()
    top_assonance_sounds: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "alliteration_count": self.alliteration_count,
            "assonance_count": self.assonance_count,
            "consonance_count": self.consonance_count,
            "density": self.density,
            "top_alliterative_sounds": list(self.top_alliterative_sounds),
            "top_assonance_sounds": list(self.top_assonance_sounds),
        }


@dataclass(frozen=True)
class SoundPatternAnalysis:
    lines: Tuple[LineSoundPatterns, ...]
    summary: SoundPatternSummary

    @classmethod
    def empty(cls) -> "SoundPatternAnalysis":
        return cls(lines=(), summary=SoundPatternSummary())

    def as_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.as_dict() for line in self.lines],
            "summary": self.summary.as_dict(),
        }


@dataclass(frozen=True)
class _PhoneticWord:
    word: str
    position: int
    initial_consonants: Tuple[str, ...]
    vowels: Tuple[str, ...]
    consonants: Tuple[str, ...]


# Word sounds -------------------------------------------------------------------
def _phonetic_words(line: str, loader: CMUDictLoader) -> List[_PhoneticWord]:
    words: List[_PhoneticWord] = []
    for word, position in tokenize_line(line):
        pronunciations = loader.get_pronunciations(word)
        if not pronunciations:
            continue

        phonemes = [base_phoneme(phone) for phone in pronunciations[0]]
        initials: List[str] = []
        for phone in phonemes:
            if is_vowel(phone):
                break
            initials.append(phone)

        words.append(
            _PhoneticWord(
                word=word,
                position=position,
                initial_consonants=tuple(initials),
                vowels=tuple(phone for phone in phonemes if is_vowel(phone)),
                consonants=tuple(phone for phone in phonemes if not is_vowel(phone)),
            )
        )
    return words


def calculate_pattern_strength(positions: Sequence[int], line_length: int) -> float:
    """Score in ``[0, 1]`` rising with the number of words and their closeness.

    Two words start at 0.3 and every further word adds 0.2; the score is
    then reduced by half the share of the line the words spread across.
    """

    word_count = len(positions)
    if word_count < 2 or line_length <= 0:
        return 0.0

    count_score = min(1.0, 0.3 + (word_count - 2) * 0.2)
    spread = (max(positions) - min(positions)) / line_length
    return min(1.0, count_score * (1.0 - spread * 0.5))


def _group_by_sound(
    words: Sequence[_PhoneticWord], sounds_of: Callable[[_PhoneticWord], Sequence[str]]
) -> Dict[str, List[_PhoneticWord]]:
    groups: Dict[str, List[_PhoneticWord]] = {}
    for word in words:
        for sound in dict.fromkeys(sounds_of(word)):
            groups.setdefault(sound, []).append(word)
    return groups


def _detect(
    line: str,
    line_number: int,
    pattern_type: SoundPatternType,
    sounds_of: Callable[[_PhoneticWord], Sequence[str]],
    cmu_loader: Optional[CMUDictLoader],
) -> List[SoundPatternOccurrence]:
    loader = cmu_loader if cmu_loader is not None else DEFAULT_CMU_LOADER
    words = [word for word in _phonetic_words(line, loader) if sounds_of(word)]
    if len(words) < 2:
        return []

    occurrences: List[SoundPatternOccurrence] = []
    for sound, members in _group_by_sound(words, sounds_of).items():
        common = pattern_type == SoundPatternType.CONSONANCE and sound in COMMON_CONSONANTS
        if len(members) < (COMMON_CONSONANT_MIN_WORDS if common else 2):
            continue

        positions = tuple(word.position for word in members)
        strength = calculate_pattern_strength(positions, len(line))
        if common:
            strength *= COMMON_CONSONANT_DAMPING

        occurrences.append(
            SoundPatternOccurrence(
                pattern_type=pattern_type,
                sound=sound,
                words=tuple(word.word for word in members),
                positions=positions,
                line_number=line_number,
                strength=strength,
            )
        )
    return occurrences


# Detectors ---------------------------------------------------------------------
def detect_alliteration(
    line: str, line_number: int = 0, cmu_loader: Optional[CMUDictLoader] = None
) -> List[SoundPatternOccurrence]:
    """Words of ``line`` sharing their first consonant sound.

    "bat bit bright" alliterates on ``B``. Words opening with a vowel are
    left out.
    """

    return _detect(
        line,
        line_number,
        SoundPatternType.ALLITERATION,
        lambda word: word.initial_consonants[:1],
        cmu_loader,
    )


def detect_assonance(
    line: str, line_number: int = 0, cmu_loader: Optional[CMUDictLoader] = None
) -> List[SoundPatternOccurrence]:
    """Words of ``line`` sharing a vowel sound anywhere in the word."""

    return _detect(
        line,
        line_number,
        SoundPatternType.ASSONANCE,
        lambda word: word.vowels,
        cmu_loader,
    )


def detect_consonance(
    line: str, line_number: int = 0, cmu_loader: Optional[CMUDictLoader] = None
) -> List[SoundPatternOccurrence]:
    """Words of ``line`` sharing a consonant sound anywhere in the word.

    The very common consonants T, N, S, R, L and D need three words and
    their strength is damped by 0.7.
    """

    return _detect(
        line,
        line_number,
        SoundPatternType.CONSONANCE,
        lambda word: word.consonants,
        cmu_loader,
    )


def analyze_line_sound_patterns(
    line: str, line_number: int = 0, cmu_loader: Optional[CMUDictLoader] = None
) -> LineSoundPatterns:
    return LineSoundPatterns(
        line_number=line_number,
        text=line,
        alliterations=tuple(detect_alliteration(line, line_number, cmu_loader)),
        assonances=tuple(detect_assonance(line, line_number, cmu_loader)),
        consonances=tuple(detect_consonance(line, line_number, cmu_loader)),
    )


def analyze_sound_patterns(
    lines: Optional[Sequence[str]], cmu_loader: Optional[CMUDictLoader] = None
) -> SoundPatternAnalysis:
    """Sound patterns of every line plus poem-wide counts.

    Density is the number of patterns per line over five, capped at 1. The
    top sounds are the three most frequent alliterative consonants and
    assonant vowels, earliest first on ties.
    """

    if not lines:
        return SoundPatternAnalysis.empty()

    analysed = [
        analyze_line_sound_patterns(line, index, cmu_loader) for index, line in enumerate(lines)
    ]
    alliterative_sounds = Counter(
        pattern.sound for line in analysed for pattern in line.alliterations
    )
    assonance_sounds = Counter(pattern.sound for line in analysed for pattern in line.assonances)

    alliteration_count = sum(len(line.alliterations) for line in analysed)
    assonance_count = sum(len(line.assonances) for line in analysed)
    consonance_count = sum(len(line.consonances) for line in analysed)
    total = alliteration_count + assonance_count + consonance_count

    summary = SoundPatternSummary(
        alliteration_count=alliteration_count,
        assonance_count=assonance_count,
        consonance_count=consonance_count,
        density=min(1.0, total / (len(lines) * PATTERNS_PER_LINE_FOR_FULL_DENSITY)),
        top_alliterative_sounds=tuple(
            sound for sound, _ in alliterative_sounds.most_common(TOP_SOUND_COUNT)
        ),
        top_assonance_sounds=tuple(
            sound for sound, _ in assonance_sounds.most_common(TOP_SOUND_COUNT)
        ),
    )
    _logger.debug("Analysed sound patterns", context=summary.as_dict())
    return SoundPatternAnalysis(lines=tuple(analysed), summary=summary)


_SOUND_NAMES: Dict[str, str] = {
    "AA": "ah",
    "AE": "a",
    "AH": "uh",
    "AO": "aw",
    "AW": "ow",
    "AY": "i",
    "EH": "e",
    "ER": "er",
    "EY": "ay",
    "IH": "ih",
    "IY": "ee",
    "OW": "oh",
    "OY": "oy",
    "UH": "oo",
    "UW": "oo",
    "CH": "ch",
    "DH": "th (voiced)",
    "HH": "h",
    "JH": "j",
    "NG": "ng",
    "SH": "sh",
    "TH": "th",
    "ZH": "zh",
}


def describe_sound_pattern(pattern: SoundPatternOccurrence) -> str:
    """One-line reading of ``pattern``, listing at most three of its words."""

    sound = _SOUND_NAMES.get(pattern.sound, pattern.sound.lower())
    listed = ", ".join(pattern.words[:3])
    if len(pattern.words) > 3:
        listed += f" (+{len(pattern.words) - 3} more)"

    if pattern.pattern_type == SoundPatternType.ASSONANCE:
        return f'Assonance with "{sound}" vowel: {listed}'
    if pattern.pattern_type == SoundPatternType.ALLITERATION:
        return f'Alliteration on "{sound}" sound: {listed}'
    return f'Consonance on "{sound}" sound: {listed}'


__all__ = [
    "LineSoundPatterns",
    "SoundPatternAnalysis",
    "SoundPatternOccurrence",
    "SoundPatternSummary",
    "SoundPatternType",
    "analyze_line_sound_patterns",
    "analyze_sound_patterns",
    "calculate_pattern_strength",
    "describe_sound_pattern",
    "detect_alliteration",
    "detect_assonance",
    "detect_consonance",
]
