"""Utilities for working with the CMU pronouncing dictionary."""

from __future__ import annotations

import re
import threading
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

import pronouncing

from poem_prosody.config import Settings
from poem_prosody.errors import DictionaryLoadError
from poem_prosody.utils.observability import create_counter, get_logger

VOWEL_PHONEMES: Set[str] = {
    "AA",
    "AE",
    "AH",
    "AO",
    "AW",
    "AY",
    "EH",
    "ER",
    "EY",
    "IH",
    "IY",
    "OW",
    "OY",
    "UH",
    "UW",
}

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")
_DIGIT_PATTERN = re.compile(r"\d")
_STRESS_MARK_PATTERN = re.compile(r"[012]$")

_logger = get_logger(__name__).bind(component="cmudict_loader")

_LOOKUPS = create_counter(
    "poem_prosody_dictionary_lookups_total",
    "Stress pattern lookups against the pronouncing dictionary",
    label_names=("result",),
)


def _strip_variant(word: str) -> str:
    return _WORD_VARIANT_PATTERN.sub("", word).lower()


def base_phoneme(phoneme: str) -> str:
    """Return ``phoneme`` without its stress digit."""

    return _DIGIT_PATTERN.sub("", phoneme)


def is_vowel(phoneme: str) -> bool:
    return base_phoneme(phoneme) in VOWEL_PHONEMES


def get_phoneme_stress(phoneme: str) -> Optional[str]:
    """Return ``"0"``, ``"1"`` or ``"2"`` for a vowel phoneme, ``None`` otherwise."""

    if not is_vowel(phoneme):
        return None
    match = _STRESS_MARK_PATTERN.search(phoneme)
    return match.group(0) if match else None


def extract_stress_from_phonemes(phonemes: Iterable[str]) -> str:
    """Concatenate the stress digits of the vowels in ``phonemes``.

    >>> extract_stress_from_phonemes(["HH", "AH0", "L", "OW1"])
    '01'
    """

    stresses = (get_phoneme_stress(phoneme) for phoneme in phonemes or ())
    return "".join(stress for stress in stresses if stress is not None)


def get_rhyming_part(phonemes: Sequence[str]) -> List[str]:
    """Return the phonemes from the last stressed vowel to the end.

    Primary stress is preferred, then secondary stress, then the final vowel
    regardless of stress. Returns an empty list when there is no vowel.
    """

    phone_list = list(phonemes or ())
    for wanted in ("1", "2"):
        for index in range(len(phone_list) - 1, -1, -1):
            if get_phoneme_stress(phone_list[index]) == wanted:
                return phone_list[index:]

    for index in range(len(phone_list) - 1, -1, -1):
        if is_vowel(phone_list[index]):
            return phone_list[index:]
    return []


class CMUDictLoader:
    """Lazy, thread-safe loader for the CMU pronouncing dictionary.

    Entries come from ``dict_path`` when given (or configured through
    ``POEM_PROSODY_CMUDICT_PATH``), otherwise from the copy bundled with
    :mod:`pronouncing`. The tables are built once and never mutated
    afterwards, so concurrent readers need no locking after the first load.
    """

    def __init__(self, dict_path: Optional[Path | str] = None) -> None:
        if dict_path is None:
            dict_path = Settings.from_env().cmudict_path
        self.dict_path: Optional[Path] = Path(dict_path) if dict_path is not None else None
        self._pronunciations: Dict[str, Tuple[Tuple[str, ...], ...]] = {}
        self._rhyme_parts: Dict[str, frozenset[str]] = {}
        self._lock = threading.Lock()
        self._loaded: bool = False

    # Loading ---------------------------------------------------------------
    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, *, strict: bool = False) -> bool:
        """Load the dictionary once; return whether entries are available.

        A missing or unreadable file leaves the loader unloaded so a later
        call can retry. With ``strict=True`` that situation raises
        :class:`DictionaryLoadError` instead.
        """

        if self._loaded:
            return True

        with self._lock:
            if self._loaded:
                return True

            try:
                entries = list(self._iter_entries())
            except (OSError, UnicodeDecodeError) as error:
                _logger.debug(
                    "Pronouncing dictionary unavailable",
                    context={"path": str(self.dict_path), "error": str(error)},
                )
                entries = []

            if not entries:
                if strict:
                    raise DictionaryLoadError(
                        "No pronouncing dictionary entries could be loaded",
                        path=self.dict_path,
                    )
                return False

            self._ingest(entries)
            self._loaded = True

        _logger.info(
            "Pronouncing dictionary loaded",
            context={
                "source": str(self.dict_path) if self.dict_path else "pronouncing",
                "words": len(self._pronunciations),
            },
        )
        return True

    def _iter_entries(self) -> Iterator[Tuple[str, str]]:
        if self.dict_path is None:
            pronouncing.init_cmu()
            yield from pronouncing.pronunciations
            return

        if not self.dict_path.exists():
            return

        with self.dict_path.open("r", encoding="utf-8") as handle:
            for line in handle:
                entry = line.strip()
                if not entry or entry.startswith(";;;"):
                    continue

                parts = entry.split(None, 1)
                if len(parts) < 2:
                    continue

                word = _strip_variant(parts[0])
                if word:
                    yield word, parts[1]

    def _ingest(self, entries: Iterable[Tuple[str, str]]) -> None:
        pronunciations: Dict[str, List[Tuple[str, ...]]] = {}
        rhyme_parts: Dict[str, Set[str]] = {}

        for raw_word, phones in entries:
            word = raw_word.lower()
            phone_tuple = tuple(phones.split())
            if not word or not phone_tuple:
                continue
            pronunciations.setdefault(word, []).append(phone_tuple)

            rhyme_part = get_rhyming_part(phone_tuple)
            if rhyme_part:
                rhyme_parts.setdefault(word, set()).add(
                    " ".join(base_phoneme(phone) for phone in rhyme_part)
                )

        self._pronunciations = {
            word: tuple(variants) for word, variants in pronunciations.items()
        }
        self._rhyme_parts = {
            word: frozenset(parts) for word, parts in rhyme_parts.items()
        }

    # Lookups ---------------------------------------------------------------
    def get_pronunciations(self, word: str) -> List[List[str]]:
        self.load()
        stored = self._pronunciations.get((word or "").strip().lower(), ())
        return [list(entry) for entry in stored]

    def get_rhyme_parts(self, word: str) -> Set[str]:
        """Return the stress-free rhyming parts of every pronunciation of ``word``."""

        self.load()
        stored = self._rhyme_parts.get((word or "").strip().lower())
        return set(stored) if stored is not None else set()

    def has_word(self, word: str) -> bool:
        self.load()
        return (word or "").strip().lower() in self._pronunciations

    def stress_pattern_for(self, word: str) -> Optional[str]:
        """Return the primary pronunciation's stress string, or ``None`` on a miss."""

        pronunciations = self.get_pronunciations(word)
        if not pronunciations:
            _LOOKUPS.labels(result="miss").inc()
            return None

        _LOOKUPS.labels(result="hit").inc()
        return extract_stress_from_phonemes(pronunciations[0])

    def get_syllable_count(self, word: str) -> Optional[int]:
        pronunciations = self.get_pronunciations(word)
        if not pronunciations:
            return None
        return sum(1 for phone in pronunciations[0] if is_vowel(phone))


DEFAULT_CMU_LOADER = CMUDictLoader()


def ensure_dictionary_loaded(loader: Optional[CMUDictLoader] = None) -> bool:
    """Load ``loader`` (the shared default when omitted) ahead of first use."""

    return (loader or DEFAULT_CMU_LOADER).load()


__all__ = [
    "CMUDictLoader",
    "DEFAULT_CMU_LOADER",
    "VOWEL_PHONEMES",
    "base_phoneme",
    "ensure_dictionary_loaded",
    "extract_stress_from_phonemes",
    "get_phoneme_stress",
    "get_rhyming_part",
    "is_vowel",
]
