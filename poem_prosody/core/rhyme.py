"""End-rhyme classification, rhyme-scheme labelling and internal rhymes."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger

from .cmudict_loader import (
    CMUDictLoader,
    DEFAULT_CMU_LOADER,
    base_phoneme,
    get_rhyming_part,
    is_vowel,
)

SLANT_SIMILARITY: float = 0.6
PARTIAL_VOWEL_SIMILARITY: float = 0.4
SAME_CLASS_CREDIT: float = 0.3
LENGTH_PENALTY: float = 0.5

_TRAILING_PUNCTUATION = re.compile(r"[.,!?;:'\"()\[\]{}—–-]+$")
_NON_WORD_CHARS = re.compile(r"[^a-zA-Z']")
_SPELLING_TAIL_SILENT_E = re.compile(r"[aeiouy]+[^aeiouy]+e$")
_SPELLING_TAIL = re.compile(r"[aeiouy]+[^aeiouy]*$")
_VOWEL_GROUP = re.compile(r"[aeiouy]+")
_LETTER_RUN = re.compile(r"[a-zA-Z']+")

_logger = get_logger(__name__).bind(component="rhyme")


class RhymeType(str, Enum):
    """Rhyme strength, strongest first."""

    PERFECT = "perfect"
    SLANT = "slant"
    ASSONANCE = "assonance"
    CONSONANCE = "consonance"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


_RHYME_STRENGTH = {rhyme_type: rank for rank, rhyme_type in enumerate(RhymeType)}


def get_last_word(line: str) -> str:
    """Lowercased final word of ``line`` with punctuation removed."""

    if not line or not line.strip():
        return ""

    words = _TRAILING_PUNCTUATION.sub("", line.strip()).split()
    if not words:
        return ""
    return _NON_WORD_CHARS.sub("", words[-1]).lower()


# Phoneme comparison ------------------------------------------------------------
def calculate_phonetic_similarity(first: Sequence[str], second: Sequence[str]) -> float:
    """Position-aligned similarity of two phoneme runs in ``[0, 1]``.

    Identical phonemes score 1, two vowels or two consonants score 0.3, and
    every phoneme of length mismatch costs 0.5 before normalising by the
    longer run.
    """

    if not first or not second:
        return 0.0

    left = [base_phoneme(phone) for phone in first]
    right = [base_phoneme(phone) for phone in second]
    longest = max(len(left), len(right))
    shortest = min(len(left), len(right))

    score = 0.0
    for index in range(shortest):
        if left[index] == right[index]:
            score += 1.0
        elif is_vowel(left[index]) == is_vowel(right[index]):
            score += SAME_CLASS_CREDIT

    score = max(0.0, score - (longest - shortest) * LENGTH_PENALTY)
    return score / longest


def _classify_phonemes(first: Sequence[str], second: Sequence[str]) -> RhymeType:
    tail_a = get_rhyming_part(first)
    tail_b = get_rhyming_part(second)
    if not tail_a or not tail_b:
        return RhymeType.NONE

    bases_a = [base_phoneme(phone) for phone in tail_a]
    bases_b = [base_phoneme(phone) for phone in tail_b]
    if bases_a == bases_b:
        return RhymeType.PERFECT

    vowels_a = [phone for phone in bases_a if is_vowel(phone)]
    vowels_b = [phone for phone in bases_b if is_vowel(phone)]
    consonants_a = [phone for phone in bases_a if not is_vowel(phone)]
    consonants_b = [phone for phone in bases_b if not is_vowel(phone)]

    vowels_match = vowels_a == vowels_b
    consonants_match = consonants_a == consonants_b
    if vowels_match and not consonants_match and vowels_a:
        return RhymeType.ASSONANCE
    if consonants_match and not vowels_match and consonants_a:
        return RhymeType.CONSONANCE

    similarity = calculate_phonetic_similarity(tail_a, tail_b)
    if similarity >= SLANT_SIMILARITY:
        return RhymeType.SLANT
    if set(vowels_a) & set(vowels_b) and similarity >= PARTIAL_VOWEL_SIMILARITY:
        return RhymeType.SLANT
    return RhymeType.NONE


def _spelling_tail(word: str) -> str:
    lowered = word.lower().strip("'")
    if len(_VOWEL_GROUP.findall(lowered)) > 1:
        match = _SPELLING_TAIL_SILENT_E.search(lowered)
        if match:
            return match.group(0)
    match = _SPELLING_TAIL.search(lowered)
    return match.group(0) if match else lowered


def classify_rhyme(
    first: str, second: str, cmu_loader: Optional[CMUDictLoader] = None
) -> RhymeType:
    """Strongest rhyme between any pronunciations of the two words.

    A shared stress-free rhyming part is a perfect rhyme without comparing
    every pronunciation pair. Words missing from the dictionary are compared
    by spelling: matching final vowel-and-coda letters count as a perfect
    rhyme.
    """

    word_a = (first or "").strip().lower()
    word_b = (second or "").strip().lower()
    if not word_a or not word_b:
        return RhymeType.NONE

    loader = cmu_loader if cmu_loader is not None else DEFAULT_CMU_LOADER
    pronunciations_a = loader.get_pronunciations(word_a)
    pronunciations_b = loader.get_pronunciations(word_b)

    if not pronunciations_a or not pronunciations_b:
        if _spelling_tail(word_a) == _spelling_tail(word_b):
            return RhymeType.PERFECT
        return RhymeType.NONE

    if loader.get_rhyme_parts(word_a) & loader.get_rhyme_parts(word_b):
        return RhymeType.PERFECT

    best = RhymeType.NONE
    for phones_a in pronunciations_a:
        for phones_b in pronunciations_b:
            candidate = _classify_phonemes(phones_a, phones_b)
            if _RHYME_STRENGTH[candidate] < _RHYME_STRENGTH[best]:
                best = candidate
            if best == RhymeType.PERFECT:
                return best
    return best


def words_rhyme(
    first: str,
    second: str,
    cmu_loader: Optional[CMUDictLoader] = None,
    *,
    strict: bool = False,
) -> bool:
    """True for any rhyme, or only for perfect rhymes when ``strict``."""

    rhyme_type = classify_rhyme(first, second, cmu_loader)
    if strict:
        return rhyme_type == RhymeType.PERFECT
    return rhyme_type != RhymeType.NONE


# Schemes ---------------------------------------------------------------------
_LABEL_ALPHABET = string.ascii_uppercase + string.ascii_lowercase
_EXTENDED_LABEL_START = 0x100


def rhyme_label(index: int) -> str:
    """Scheme letter of the ``index``-th rhyme group.

    Groups are lettered ``A``-``Z`` and then ``a``-``z``; further groups take
    consecutive letters from Latin Extended-A onward, so every group keeps
    its own single character.
    """

    if index < len(_LABEL_ALPHABET):
        return _LABEL_ALPHABET[index]
    return chr(_EXTENDED_LABEL_START + index - len(_LABEL_ALPHABET))


def detect_rhyme_scheme(
    lines: Iterable[str],
    cmu_loader: Optional[CMUDictLoader] = None,
    *,
    strict: bool = False,
) -> str:
    """Label lines ``A``, ``B``, ``C``... by rhyme group in first-seen order.

    A line joins the first earlier group containing a word it rhymes with.
    Lines without a final word always open a new group.
    """

    groups: List[tuple] = []
    labels: List[str] = []
    opened = 0

    for line in lines or ():
        word = get_last_word(line)
        matched: Optional[str] = None
        if word:
            for label, words in groups:
                if any(words_rhyme(word, other, cmu_loader, strict=strict) for other in words):
                    words.append(word)
                    matched = label
                    break

        if matched is None:
            matched = rhyme_label(opened)
            opened += 1
            if word:
                groups.append((matched, [word]))
        labels.append(matched)

    scheme = "".join(labels)
    _logger.debug("Detected rhyme scheme", context={"scheme": scheme, "strict": strict})
    return scheme


def detect_stanza_rhyme_schemes(
    stanzas: Iterable[Sequence[str]],
    cmu_loader: Optional[CMUDictLoader] = None,
    *,
    strict: bool = False,
) -> List[str]:
    """Rhyme scheme of each stanza, each one starting again from ``A``."""

    return [detect_rhyme_scheme(stanza, cmu_loader, strict=strict) for stanza in stanzas or ()]


# Internal rhymes ---------------------------------------------------------------
@dataclass(frozen=True)
class InternalRhyme:
    line: int
    positions: Tuple[int, int]
    words: Tuple[str, str]
    rhyme_type: RhymeType

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "positions": list(self.positions),
            "words": list(self.words),
            "rhyme_type": self.rhyme_type.value,
        }


def tokenize_line(line: str) -> List[Tuple[str, int]]:
    """Lowercased words of ``line`` with their character offsets.

    Quote marks around a word are dropped; inner apostrophes stay.
    """

    if not line or not line.strip():
        return []

    tokens: List[Tuple[str, int]] = []
    for match in _LETTER_RUN.finditer(line):
        word = match.group(0).strip("'").lower()
        if word:
            tokens.append((word, match.start()))
    return tokens


def find_internal_rhymes(
    line: str,
    line_number: int = 0,
    cmu_loader: Optional[CMUDictLoader] = None,
) -> List[InternalRhyme]:
    """Rhyming word pairs inside ``line``.

    Repeats of the same word are ignored. The final word is only paired with
    the first word, so end rhymes are not reported a second time.
    """

    tokens = tokenize_line(line)
    if len(tokens) < 2:
        return []

    last_position = tokens[-1][1]
    rhymes: List[InternalRhyme] = []
    for i, (first, first_position) in enumerate(tokens):
        for second, second_position in tokens[i + 1:]:
            if first == second:
                continue
            if second_position == last_position and i > 0:
                continue

            rhyme_type = classify_rhyme(first, second, cmu_loader)
            if rhyme_type != RhymeType.NONE:
                rhymes.append(
                    InternalRhyme(
                        line=line_number,
                        positions=(first_position, second_position),
                        words=(first, second),
                        rhyme_type=rhyme_type,
                    )
                )

    if rhymes:
        _logger.debug(
            "Found internal rhymes",
            context={"line": line_number, "pairs": [list(rhyme.words) for rhyme in rhymes]},
        )
    return rhymes


# Whole-poem analysis -------------------------------------------------------------
_NAMED_SCHEMES: Dict[str, str] = {
    "AA": "couplet",
    "AABB": "couplets",
    "AABBCC": "couplets",
    "AABBCCDD": "couplets",
    "ABAB": "alternate",
    "ABCABC": "alternate",
    "ABBA": "enclosed",
    "ABBAABBA": "enclosed (octave)",
    "ABABCDCD": "alternate",
    "ABABCDCDEFEFGG": "Shakespearean sonnet",
    "ABBAABBACDECDE": "Petrarchan sonnet",
    "ABBAABBACDCDCD": "Petrarchan sonnet",
    "AAB": "triplet with tail",
    "ABA": "interlocking",
    "AABBA": "limerick",
}


def identify_rhyme_form(scheme: Optional[str]) -> str:
    """Name the rhyme arrangement of ``scheme``.

    Known schemes are looked up directly. Otherwise couplets, a repeated
    half and terza rima chaining are recognised, and anything else is
    described by its share of distinct letters.
    """

    if not scheme:
        return "none"
    if scheme in _NAMED_SCHEMES:
        return _NAMED_SCHEMES[scheme]

    length = len(scheme)
    if length % 2 == 0 and all(scheme[i] == scheme[i + 1] for i in range(0, length, 2)):
        return "couplets"

    if length >= 4 and scheme[: length // 2] == scheme[length // 2:]:
        return "repeating pattern"

    if length >= 9 and length % 3 == 0:
        if all(scheme[i - 2] == scheme[i] for i in range(3, length, 3)):
            return "terza rima"

    ratio = len(set(scheme)) / length
    if ratio > 0.9:
        return "free verse (minimal rhyme)"
    if ratio > 0.7:
        return "loose rhyme"
    if ratio > 0.5:
        return "moderate rhyme"
    return "dense rhyme"


@dataclass(frozen=True)
class RhymeGroup:
    label: str
    lines: Tuple[int, ...]
    end_words: Tuple[str, ...]
    rhyme_type: RhymeType

    def as_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "lines": list(self.lines),
            "end_words": list(self.end_words),
            "rhyme_type": self.rhyme_type.value,
        }


@dataclass(frozen=True)
class RhymeAnalysis:
    """End-rhyme scheme, its groups and the internal rhymes of a poem."""

    scheme: str
    groups: Tuple[RhymeGroup, ...]
    internal_rhymes: Tuple[InternalRhyme, ...]
    rhyme_form: str

    @classmethod
    def empty(cls) -> "RhymeAnalysis":
        return cls(scheme="", groups=(), internal_rhymes=(), rhyme_form="none")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "groups": [group.as_dict() for group in self.groups],
            "internal_rhymes": [rhyme.as_dict() for rhyme in self.internal_rhymes],
            "rhyme_form": self.rhyme_form,
        }


def _group_rhyme_type(
    end_words: Sequence[str], cmu_loader: Optional[CMUDictLoader]
) -> RhymeType:
    if len(end_words) < 2:
        return RhymeType.NONE
    rhyme_type = classify_rhyme(end_words[0], end_words[1], cmu_loader)
    # Members joined through a later word can miss the first pair.
    return rhyme_type if rhyme_type != RhymeType.NONE else RhymeType.SLANT


def analyze_rhymes(
    lines: Optional[Sequence[str]],
    cmu_loader: Optional[CMUDictLoader] = None,
    *,
    strict: bool = False,
) -> RhymeAnalysis:
    """Scheme, per-letter groups and internal rhymes of ``lines``.

    A group's rhyme type is the rhyme between its first two end words; a
    single-line group has none.
    """

    if not lines:
        return RhymeAnalysis.empty()

    scheme = detect_rhyme_scheme(lines, cmu_loader, strict=strict)
    end_words = [get_last_word(line) for line in lines]

    members: Dict[str, List[int]] = {}
    for index, label in enumerate(scheme):
        members.setdefault(label, []).append(index)

    groups = []
    for label, indices in members.items():
        words = tuple(end_words[index] for index in indices)
        groups.append(
            RhymeGroup(
                label=label,
                lines=tuple(indices),
                end_words=words,
                rhyme_type=_group_rhyme_type(words, cmu_loader),
            )
        )

    internal: List[InternalRhyme] = []
    for index, line in enumerate(lines):
        internal.extend(find_internal_rhymes(line, index, cmu_loader))

    analysis = RhymeAnalysis(
        scheme=scheme,
        groups=tuple(groups),
        internal_rhymes=tuple(internal),
        rhyme_form=identify_rhyme_form(scheme),
    )
    _logger.debug(
        "Analysed rhymes",
        context={
            "scheme": scheme,
            "groups": len(groups),
            "internal_rhymes": len(internal),
            "rhyme_form": analysis.rhyme_form,
        },
    )
    return analysis


__all__ = [
    "InternalRhyme",
    "RhymeAnalysis",
    "RhymeGroup",
    "RhymeType",
    "analyze_rhymes",
    "calculate_phonetic_similarity",
    "classify_rhyme",
    "detect_rhyme_scheme",
    "detect_stanza_rhyme_schemes",
    "find_internal_rhymes",
    "get_last_word",
    "identify_rhyme_form",
    "rhyme_label",
    "tokenize_line",
    "words_rhyme",
]
