"""Orthographic syllable and stress estimation for out-of-vocabulary words."""

from __future__ import annotations

import re


__all__ = ["estimate_syllable_count", "estimate_stress_for_unknown_word"]


_VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")
_CONSONANT_END_PATTERN = re.compile(r"[bcdfghjklmnpqrstvwxz]$")
_T_OR_D_END_PATTERN = re.compile(r"[td]$")


def estimate_syllable_count(word: str) -> int:
    """Estimate the number of syllables in ``word`` using vowel groups.

    Consecutive vowels (``y`` included) count as one syllable. A trailing
    silent ``e`` after a consonant is dropped unless the word ends in ``le``,
    and an ``-ed`` suffix only counts after ``t`` or ``d``. Blank input has no
    syllables; anything else has at least one.
    """

    normalized = (word or "").strip().lower()
    if not normalized:
        return 0

    syllable_count = len(_VOWEL_GROUP_PATTERN.findall(normalized))

    if normalized.endswith("e") and syllable_count > 1 and not normalized.endswith("le"):
        if _CONSONANT_END_PATTERN.search(normalized[:-1]):
            syllable_count -= 1

    if normalized.endswith("ed") and syllable_count > 1:
        if not _T_OR_D_END_PATTERN.search(normalized[:-2]):
            syllable_count -= 1

    return max(1, syllable_count)


def estimate_stress_for_unknown_word(word: str) -> str:
    """Return a rule-of-thumb stress pattern for a word missing from the dictionary.

    One syllable is stressed (``"1"``), two are trochaic (``"10"``), three are
    dactylic (``"100"``) and longer words alternate starting unstressed.
    """

    syllable_count = estimate_syllable_count(word)
    if syllable_count == 0:
        return ""
    if syllable_count == 1:
        return "1"
    if syllable_count == 2:
        return "10"
    if syllable_count == 3:
        return "100"
    return "".join("1" if index % 2 == 1 else "0" for index in range(syllable_count))
