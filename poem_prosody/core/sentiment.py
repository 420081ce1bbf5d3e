"""Word-level lexicon sentiment scoring.

Polarity values come from the VADER lexicon shipped with ``vaderSentiment``.
Each token scores its rounded lexicon valence (an integer between -4 and 4),
flipped when the previous token is a negation. ``comparative`` normalises the
summed score by the number of tokens.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from vaderSentiment.vaderSentiment import NEGATE, SentimentIntensityAnalyzer

from poem_prosody.utils.observability import get_logger

_PUNCTUATION_PATTERN = re.compile(r"[.,/#!?$%^&*;:{}=_`\"~()\[\]<>|\\+]")

_logger = get_logger(__name__).bind(component="sentiment")


@dataclass(frozen=True)
class SentimentScore:
    score: int
    comparative: float
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]

    @classmethod
    def neutral(cls) -> "SentimentScore":
        return cls(score=0, comparative=0.0, positive=(), negative=())

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "comparative": self.comparative,
            "positive": list(self.positive),
            "negative": list(self.negative),
        }


@lru_cache(maxsize=1)
def _polarity_lexicon() -> Mapping[str, float]:
    """Load the VADER lexicon once per process."""

    lexicon = SentimentIntensityAnalyzer().lexicon
    _logger.debug("Sentiment lexicon loaded", context={"entries": len(lexicon)})
    return lexicon


@lru_cache(maxsize=1)
def _negations() -> FrozenSet[str]:
    return frozenset(word.lower() for word in NEGATE)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def tokenize_for_sentiment(text: str) -> List[str]:
    """Lowercase ``text`` and split it on whitespace once punctuation is blanked."""

    cleaned = _PUNCTUATION_PATTERN.sub(" ", (text or "").lower())
    return cleaned.split()


def analyze_sentiment(text: Optional[str]) -> SentimentScore:
    """Score ``text``; blank or non-string input yields a neutral result."""

    if not text or not isinstance(text, str):
        return SentimentScore.neutral()

    tokens = tokenize_for_sentiment(text)
    if not tokens:
        return SentimentScore.neutral()

    lexicon = _polarity_lexicon()
    negations = _negations()

    score = 0
    positive: List[str] = []
    negative: List[str] = []
    for index, token in enumerate(tokens):
        valence = lexicon.get(token)
        if valence is None:
            continue

        token_score = _round_half_away(valence)
        if index > 0 and tokens[index - 1] in negations:
            token_score = -token_score
        if token_score == 0:
            continue

        score += token_score
        (positive if token_score > 0 else negative).append(token)

    result = SentimentScore(
        score=score,
        comparative=score / len(tokens),
        positive=tuple(positive),
        negative=tuple(negative),
    )
    _logger.debug(
        "Scored sentiment",
        context={
            "score": result.score,
            "comparative": round(result.comparative, 3),
            "positive": list(result.positive),
            "negative": list(result.negative),
        },
    )
    return result


__all__ = ["SentimentScore", "analyze_sentiment", "tokenize_for_sentiment"]
