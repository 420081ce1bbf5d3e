"""Text normalisation, line and stanza splitting and word tokenisation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Tuple

_LINE_BREAK_PATTERN = re.compile(r"\r\n?")
_SPACE_RUN_PATTERN = re.compile(r" {2,}")
_CONTRACTION_PATTERN = re.compile(r"^[A-Za-z]*'[A-Za-z]+$|^[A-Za-z]+'[A-Za-z]*$")
_WORD_PATTERN = re.compile(r"[\w']+")
_EDGE_PUNCTUATION = re.compile(r"^[^\w']+|[^\w']+$")
_EDGE_NON_HYPHEN = re.compile(r"^[^\w-]+|[^\w-]+$")


@dataclass(frozen=True)
class PreprocessedPoem:
    original: str
    normalized: str
    stanzas: Tuple[Tuple[str, ...], ...]
    tokens: Tuple[Tuple[str, ...], ...]

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(line for stanza in self.stanzas for line in stanza)

    @property
    def line_count(self) -> int:
        return sum(len(stanza) for stanza in self.stanzas)

    @property
    def word_count(self) -> int:
        return sum(len(words) for words in self.tokens)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "stanzas": [list(stanza) for stanza in self.stanzas],
            "tokens": [list(words) for words in self.tokens],
            "line_count": self.line_count,
            "word_count": self.word_count,
        }


def normalize_whitespace(text: str) -> str:
    """Unify line endings, expand tabs, squeeze space runs and trim blank
    lines from both ends. Indentation of single spaces survives."""

    if not text:
        return ""

    normalized = _LINE_BREAK_PATTERN.sub("\n", text).replace("\t", " ")
    lines = [_SPACE_RUN_PATTERN.sub(" ", line.rstrip()) for line in normalized.split("\n")]
    return "\n".join(lines).strip("\n")


def split_lines(text: str) -> List[str]:
    if not text:
        return []
    return text.split("\n")


def detect_stanzas(text: str) -> List[List[str]]:
    """Group non-blank lines into stanzas separated by blank lines."""

    stanzas: List[List[str]] = []
    current: List[str] = []
    for line in split_lines(text):
        if line.strip():
            current.append(line)
        elif current:
            stanzas.append(current)
            current = []
    if current:
        stanzas.append(current)
    return stanzas


@lru_cache(maxsize=2048)
def _tokenize(line: str) -> Tuple[str, ...]:
    words: List[str] = []
    for token in line.split():
        if _CONTRACTION_PATTERN.match(_EDGE_PUNCTUATION.sub("", token)):
            cleaned = _EDGE_PUNCTUATION.sub("", token)
            if cleaned:
                words.append(cleaned)
            continue

        if "-" in token and not token.startswith("-") and not token.endswith("-"):
            hyphenated = _EDGE_NON_HYPHEN.sub("", token).strip("-")
            if "-" in hyphenated:
                words.append(hyphenated)
                continue

        for match in _WORD_PATTERN.findall(token):
            cleaned = match.strip("'")
            if cleaned and not cleaned.isdigit() and cleaned != "_":
                words.append(cleaned)
    return tuple(words)


def tokenize_words(line: str) -> List[str]:
    """Split ``line`` into words.

    Contractions (``don't``, ``'tis``) and inner-hyphen compounds
    (``well-known``) stay whole; surrounding punctuation is dropped.
    """

    if not line or not line.strip():
        return []
    return list(_tokenize(line))


def preprocess_poem(text: str) -> PreprocessedPoem:
    normalized = normalize_whitespace(text or "")
    stanzas = tuple(tuple(stanza) for stanza in detect_stanzas(normalized))
    tokens = tuple(tuple(tokenize_words(line)) for stanza in stanzas for line in stanza)
    return PreprocessedPoem(original=text or "", normalized=normalized, stanzas=stanzas, tokens=tokens)


__all__ = [
    "PreprocessedPoem",
    "detect_stanzas",
    "normalize_whitespace",
    "preprocess_poem",
    "split_lines",
    "tokenize_words",
]
