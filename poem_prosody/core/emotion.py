"""Emotion analysis: keyword detection, valence/arousal blending, emotional arc
tracking and musical parameter suggestions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger

from .emotion_lexicon import (
    EMOTION_LEXICON,
    EMOTION_TO_MUSIC,
    EMOTION_TO_VA,
    EmotionCategory,
    MusicParams,
    VAPoint,
    coerce_emotion,
)
from .sentiment import SentimentScore, analyze_sentiment

SENTIMENT_VA_WEIGHT: float = 0.4
KEYWORD_VA_WEIGHT: float = 0.6
MAX_DOMINANT_EMOTIONS: int = 3
TRAJECTORY_DIRECTION_THRESHOLD: float = 0.15
TRAJECTORY_VARIANCE_THRESHOLD: float = 0.15
NEUTRAL_VA = VAPoint(valence=0.5, arousal=0.5)
FALLBACK_EMOTION = EmotionCategory.PEACEFUL

TRAJECTORY_RISING = "rising"
TRAJECTORY_FALLING = "falling"
TRAJECTORY_STABLE = "stable"
TRAJECTORY_VARIED = "varied"

_WORD_SPLIT_PATTERN = re.compile(r"\W+")

_logger = get_logger(__name__).bind(component="emotion")


@dataclass(frozen=True)
class EmotionKeyword:
    word: str
    emotion: EmotionCategory
    intensity: float

    def as_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "emotion": self.emotion.value, "intensity": self.intensity}


@dataclass(frozen=True)
class EmotionalArcEntry:
    stanza: int
    sentiment: float
    keywords: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"stanza": self.stanza, "sentiment": self.sentiment, "keywords": list(self.keywords)}


@dataclass(frozen=True)
class EmotionArc:
    """Per-stanza sentiment plus its overall shape."""

    entries: Tuple[EmotionalArcEntry, ...]
    trajectory: str
    range: float
    peak_stanza: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.as_dict() for entry in self.entries],
            "trajectory": self.trajectory,
            "range": self.range,
            "peak_stanza": self.peak_stanza,
        }


@dataclass(frozen=True)
class EmotionalAnalysis:
    overall_sentiment: float
    valence: float
    arousal: float
    dominant_emotions: Tuple[EmotionCategory, ...]
    emotional_arc: Tuple[EmotionalArcEntry, ...]
    suggested_music_params: MusicParams

    def as_dict(self) -> Dict[str, Any]:
        return {
            "overall_sentiment": self.overall_sentiment,
            "valence": self.valence,
            "arousal": self.arousal,
            "dominant_emotions": [emotion.value for emotion in self.dominant_emotions],
            "emotional_arc": [entry.as_dict() for entry in self.emotional_arc],
            "suggested_music_params": self.suggested_music_params.as_dict(),
        }


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


# Keywords --------------------------------------------------------------------
def detect_emotional_keywords(text: Optional[str]) -> List[EmotionKeyword]:
    """Return every lexicon hit in ``text``.

    Words are matched case-insensitively and only their first occurrence is
    considered. A word listed under several categories yields one keyword
    per category.
    """

    if not text or not isinstance(text, str):
        return []

    keywords: List[EmotionKeyword] = []
    seen: set = set()
    for word in _WORD_SPLIT_PATTERN.split(text.lower()):
        if not word or word in seen:
            continue
        seen.add(word)

        for category, lexicon in EMOTION_LEXICON.items():
            intensity = lexicon.get(word)
            if intensity is not None:
                keywords.append(EmotionKeyword(word=word, emotion=category, intensity=intensity))

    _logger.debug(
        "Detected emotional keywords",
        context={"keywords": [f"{item.word}({item.emotion.value})" for item in keywords]},
    )
    return keywords


# Valence / arousal -----------------------------------------------------------
def map_to_valence_arousal(sentiment: SentimentScore) -> VAPoint:
    """Valence from the comparative score, arousal from score magnitude and
    the number of polar words."""

    valence = (_clamp(sentiment.comparative, -1.0, 1.0) + 1.0) / 2.0
    score_intensity = min(abs(sentiment.score) / 10.0, 1.0)
    word_intensity = min((len(sentiment.positive) + len(sentiment.negative)) / 5.0, 1.0)
    return VAPoint(valence=valence, arousal=(score_intensity + word_intensity) / 2.0)


def blend_keyword_emotions(keywords: Iterable[EmotionKeyword]) -> VAPoint:
    total_weight = 0.0
    weighted_valence = 0.0
    weighted_arousal = 0.0
    for keyword in keywords or ():
        point = EMOTION_TO_VA[keyword.emotion]
        weighted_valence += point.valence * keyword.intensity
        weighted_arousal += point.arousal * keyword.intensity
        total_weight += keyword.intensity

    if total_weight <= 0:
        return NEUTRAL_VA
    return VAPoint(valence=weighted_valence / total_weight, arousal=weighted_arousal / total_weight)


def va_to_emotion(va: VAPoint) -> EmotionCategory:
    """Nearest category by Euclidean distance; table order breaks ties."""

    closest = FALLBACK_EMOTION
    best_distance = math.inf
    for category, point in EMOTION_TO_VA.items():
        distance = va.distance_to(point)
        if distance < best_distance:
            best_distance = distance
            closest = category
    return closest


def suggest_musical_parameters(
    valence: float,
    arousal: float,
    dominant_emotions: Sequence[object] = (),
    overall_sentiment: float = 0.0,
) -> MusicParams:
    """Music for the leading dominant emotion, or for the nearest emotion in
    valence/arousal space when none of them is a known category."""

    leading = coerce_emotion(dominant_emotions[0]) if dominant_emotions else None
    if leading is not None:
        _logger.debug("Music from dominant emotion", context={"emotion": leading.value})
        return EMOTION_TO_MUSIC[leading]

    derived = va_to_emotion(VAPoint(valence=valence, arousal=arousal))
    _logger.debug(
        "Music derived from valence/arousal",
        context={"emotion": derived.value, "overall_sentiment": overall_sentiment},
    )
    return EMOTION_TO_MUSIC[derived]


# Emotional arc ---------------------------------------------------------------
def determine_trajectory(entries: Sequence[EmotionalArcEntry]) -> str:
    """Compare the first and last thirds of the arc.

    A shift of more than 0.15 in mean sentiment is rising or falling. Without
    one, a population variance above 0.15 is varied, anything else stable.
    """

    if len(entries) < 2:
        return TRAJECTORY_STABLE

    window = math.ceil(len(entries) / 3)
    first = [entry.sentiment for entry in entries[:window]]
    last = [entry.sentiment for entry in entries[-window:]]
    difference = sum(last) / len(last) - sum(first) / len(first)

    if abs(difference) > TRAJECTORY_DIRECTION_THRESHOLD:
        return TRAJECTORY_RISING if difference > 0 else TRAJECTORY_FALLING

    values = [entry.sentiment for entry in entries]
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    if variance > TRAJECTORY_VARIANCE_THRESHOLD:
        return TRAJECTORY_VARIED
    return TRAJECTORY_STABLE


def analyze_emotional_arc(stanzas: Optional[Sequence[Sequence[str]]]) -> EmotionArc:
    if not stanzas:
        return EmotionArc(entries=(), trajectory=TRAJECTORY_STABLE, range=0.0, peak_stanza=0)

    entries: List[EmotionalArcEntry] = []
    lowest = math.inf
    highest = -math.inf
    peak_stanza = 0
    peak_magnitude = 0.0

    for index, stanza in enumerate(stanzas):
        stanza_text = " ".join(stanza)
        sentiment = _clamp(analyze_sentiment(stanza_text).comparative, -1.0, 1.0)
        keywords = detect_emotional_keywords(stanza_text)

        lowest = min(lowest, sentiment)
        highest = max(highest, sentiment)
        if abs(sentiment) > peak_magnitude:
            peak_magnitude = abs(sentiment)
            peak_stanza = index

        entries.append(
            EmotionalArcEntry(
                stanza=index,
                sentiment=sentiment,
                keywords=tuple(keyword.word for keyword in keywords),
            )
        )

    arc = EmotionArc(
        entries=tuple(entries),
        trajectory=determine_trajectory(entries),
        range=highest - lowest,
        peak_stanza=peak_stanza,
    )
    _logger.debug(
        "Analysed emotional arc",
        context={
            "stanzas": len(entries),
            "trajectory": arc.trajectory,
            "range": round(arc.range, 3),
            "peak_stanza": arc.peak_stanza,
        },
    )
    return arc


# Composition -----------------------------------------------------------------
def _rank_dominant_emotions(keywords: Sequence[EmotionKeyword]) -> List[EmotionCategory]:
    totals: Dict[EmotionCategory, float] = {}
    for keyword in keywords:
        totals[keyword.emotion] = totals.get(keyword.emotion, 0.0) + keyword.intensity
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [category for category, _ in ranked[:MAX_DOMINANT_EMOTIONS]]


def analyze_emotion(
    text: Optional[str], stanzas: Optional[Sequence[Sequence[str]]] = None
) -> EmotionalAnalysis:
    """Full emotional profile of a poem.

    ``stanzas`` drives the arc; the remaining measures use ``text`` as a
    whole. Sentiment and keyword evidence are blended 40/60 in
    valence/arousal space.
    """

    sentiment = analyze_sentiment(text)
    keywords = detect_emotional_keywords(text)

    sentiment_va = map_to_valence_arousal(sentiment)
    keyword_va = blend_keyword_emotions(keywords)
    valence = sentiment_va.valence * SENTIMENT_VA_WEIGHT + keyword_va.valence * KEYWORD_VA_WEIGHT
    arousal = sentiment_va.arousal * SENTIMENT_VA_WEIGHT + keyword_va.arousal * KEYWORD_VA_WEIGHT

    dominant = _rank_dominant_emotions(keywords)
    if not dominant:
        dominant = [va_to_emotion(VAPoint(valence=valence, arousal=arousal))]

    arc = analyze_emotional_arc(stanzas)
    music = suggest_musical_parameters(
        valence=valence,
        arousal=arousal,
        dominant_emotions=dominant,
        overall_sentiment=sentiment.comparative,
    )

    analysis = EmotionalAnalysis(
        overall_sentiment=_clamp(sentiment.comparative, -1.0, 1.0),
        valence=valence,
        arousal=arousal,
        dominant_emotions=tuple(dominant),
        emotional_arc=arc.entries,
        suggested_music_params=music,
    )
    _logger.debug(
        "Emotion analysis complete",
        context={
            "sentiment": round(analysis.overall_sentiment, 3),
            "arousal": round(analysis.arousal, 3),
            "dominant": [emotion.value for emotion in analysis.dominant_emotions],
        },
    )
    return analysis


__all__ = [
    "EMOTION_LEXICON",
    "EMOTION_TO_MUSIC",
    "EMOTION_TO_VA",
    "EmotionArc",
    "EmotionCategory",
    "EmotionKeyword",
    "EmotionalAnalysis",
    "EmotionalArcEntry",
    "MusicParams",
    "SentimentScore",
    "VAPoint",
    "analyze_emotion",
    "analyze_emotional_arc",
    "analyze_sentiment",
    "blend_keyword_emotions",
    "detect_emotional_keywords",
    "determine_trajectory",
    "map_to_valence_arousal",
    "suggest_musical_parameters",
    "va_to_emotion",
]
