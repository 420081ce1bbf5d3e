"""Read-only emotion vocabulary: keyword lexicon, circumplex coordinates and
the musical parameters associated with each emotion category."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class EmotionCategory(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    PEACEFUL = "peaceful"
    TENSE = "tense"
    NOSTALGIC = "nostalgic"
    HOPEFUL = "hopeful"
    FEARFUL = "fearful"
    LOVING = "loving"
    LONELY = "lonely"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


def coerce_emotion(value: object) -> Optional[EmotionCategory]:
    """Return the matching :class:`EmotionCategory` or ``None`` when unrecognised."""

    if isinstance(value, EmotionCategory):
        return value
    if value is None:
        return None
    try:
        return EmotionCategory(str(value).strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class VAPoint:
    """A point in Russell's valence/arousal plane, both axes in ``[0, 1]``."""

    valence: float
    arousal: float

    def distance_to(self, other: "VAPoint") -> float:
        return ((self.valence - other.valence) ** 2 + (self.arousal - other.arousal) ** 2) ** 0.5

    def as_dict(self) -> Dict[str, float]:
        return {"valence": self.valence, "arousal": self.arousal}


@dataclass(frozen=True)
class MusicParams:
    mode: str
    tempo_range: Tuple[int, int]
    register: str
    suggested_key: str
    dynamics: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "tempo_range": list(self.tempo_range),
            "register": self.register,
            "suggested_key": self.suggested_key,
            "dynamics": self.dynamics,
        }


def _freeze(table: Dict[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(table))


# Keyword lexicon (word -> intensity) -------------------------------------------
EMOTION_LEXICON: Mapping[EmotionCategory, Mapping[str, float]] = _freeze(
    {
        EmotionCategory.HAPPY: _freeze(
            {
                "joy": 1.0,
                "happy": 1.0,
                "joyful": 1.0,
                "delight": 0.9,
                "delighted": 0.9,
                "cheerful": 0.8,
                "merry": 0.8,
                "glad": 0.7,
                "pleased": 0.7,
                "content": 0.6,
                "smile": 0.7,
                "laugh": 0.8,
                "laughter": 0.8,
                "celebrate": 0.9,
                "bliss": 1.0,
                "blissful": 1.0,
                "ecstatic": 1.0,
                "elated": 0.9,
                "jubilant": 0.9,
                "radiant": 0.8,
                "bright": 0.6,
                "sunshine": 0.7,
                "wonderful": 0.8,
                "amazing": 0.8,
                "fantastic": 0.8,
                "brilliant": 0.7,
            }
        ),
        EmotionCategory.SAD: _freeze(
            {
                "sad": 1.0,
                "sadness": 1.0,
                "sorrow": 1.0,
                "grief": 1.0,
                "grieve": 1.0,
                "mourn": 0.9,
                "mourning": 0.9,
                "weep": 0.9,
                "weeping": 0.9,
                "cry": 0.8,
                "crying": 0.8,
                "tears": 0.7,
                "tear": 0.6,
                "melancholy": 0.9,
                "melancholic": 0.9,
                "despair": 1.0,
                "hopeless": 0.9,
                "gloomy": 0.7,
                "gloom": 0.7,
                "misery": 1.0,
                "miserable": 1.0,
                "heartbreak": 1.0,
                "heartbroken": 1.0,
                "woe": 0.9,
                "lament": 0.8,
                "anguish": 1.0,
                "dejected": 0.8,
                "somber": 0.7,
                "bleak": 0.8,
            }
        ),
        EmotionCategory.ANGRY: _freeze(
            {
                "angry": 1.0,
                "anger": 1.0,
                "rage": 1.0,
                "fury": 1.0,
                "furious": 1.0,
                "wrath": 1.0,
                "hate": 0.9,
                "hatred": 0.9,
                "loathe": 0.9,
                "despise": 0.8,
                "bitter": 0.7,
                "bitterness": 0.7,
                "resentment": 0.8,
                "resent": 0.7,
                "outrage": 0.9,
                "outraged": 0.9,
                "enraged": 1.0,
                "hostile": 0.8,
                "fierce": 0.7,
                "violent": 0.9,
                "vengeance": 0.9,
                "revenge": 0.8,
                "scorn": 0.7,
                "contempt": 0.8,
            }
        ),
        EmotionCategory.PEACEFUL: _freeze(
            {
                "peace": 1.0,
                "peaceful": 1.0,
                "calm": 0.9,
                "calming": 0.9,
                "serene": 1.0,
                "serenity": 1.0,
                "tranquil": 1.0,
                "tranquility": 1.0,
                "quiet": 0.7,
                "stillness": 0.8,
                "still": 0.6,
                "gentle": 0.8,
                "soft": 0.6,
                "soothing": 0.9,
                "relaxed": 0.8,
                "rest": 0.6,
                "resting": 0.6,
                "harmony": 0.9,
                "harmonious": 0.9,
                "placid": 0.8,
                "mellow": 0.7,
                "ease": 0.7,
                "comfortable": 0.6,
                "content": 0.7,
                "dream": 0.6,
                "dreaming": 0.6,
            }
        ),
        EmotionCategory.TENSE: _freeze(
            {
                "tense": 1.0,
                "tension": 1.0,
                "anxious": 0.9,
                "anxiety": 0.9,
                "nervous": 0.8,
                "worry": 0.8,
                "worried": 0.8,
                "stress": 0.8,
                "stressed": 0.8,
                "restless": 0.7,
                "uneasy": 0.7,
                "dread": 0.9,
                "apprehension": 0.8,
                "suspense": 0.7,
                "agitated": 0.8,
                "turmoil": 0.9,
                "chaos": 0.8,
                "conflict": 0.7,
                "struggle": 0.7,
                "fight": 0.6,
                "storm": 0.7,
                "stormy": 0.7,
                "dark": 0.5,
                "darkness": 0.6,
                "shadow": 0.5,
                "shadows": 0.5,
            }
        ),
        EmotionCategory.NOSTALGIC: _freeze(
            {
                "nostalgic": 1.0,
                "nostalgia": 1.0,
                "memory": 0.7,
                "memories": 0.7,
                "remember": 0.7,
                "remembrance": 0.8,
                "yesterday": 0.6,
                "past": 0.5,
                "ago": 0.4,
                "once": 0.4,
                "childhood": 0.7,
                "youth": 0.6,
                "young": 0.5,
                "old": 0.5,
                "ancient": 0.5,
                "forgotten": 0.7,
                "faded": 0.6,
                "bygone": 0.7,
                "longing": 0.8,
                "wistful": 0.9,
                "bittersweet": 0.8,
                "reminisce": 0.8,
                "echo": 0.5,
                "echoes": 0.5,
                "ghost": 0.6,
                "ghosts": 0.6,
            }
        ),
        EmotionCategory.HOPEFUL: _freeze(
            {
                "hope": 1.0,
                "hopeful": 1.0,
                "hoping": 0.9,
                "dream": 0.7,
                "dreams": 0.7,
                "dreaming": 0.7,
                "wish": 0.7,
                "wishing": 0.7,
                "aspire": 0.8,
                "aspiration": 0.8,
                "believe": 0.8,
                "faith": 0.9,
                "trust": 0.7,
                "promise": 0.7,
                "tomorrow": 0.6,
                "future": 0.6,
                "new": 0.5,
                "begin": 0.6,
                "beginning": 0.6,
                "dawn": 0.7,
                "sunrise": 0.7,
                "light": 0.6,
                "rise": 0.6,
                "rising": 0.6,
                "grow": 0.5,
                "growing": 0.5,
                "bloom": 0.7,
                "spring": 0.6,
            }
        ),
        EmotionCategory.FEARFUL: _freeze(
            {
                "fear": 1.0,
                "fearful": 1.0,
                "afraid": 1.0,
                "scared": 0.9,
                "terrified": 1.0,
                "terror": 1.0,
                "horror": 1.0,
                "horrified": 1.0,
                "dread": 0.9,
                "dreading": 0.9,
                "panic": 0.9,
                "fright": 0.8,
                "frightened": 0.8,
                "nightmare": 0.9,
                "haunt": 0.7,
                "haunted": 0.7,
                "creep": 0.6,
                "creeping": 0.6,
                "shiver": 0.6,
                "tremble": 0.7,
                "trembling": 0.7,
                "chill": 0.5,
                "cold": 0.4,
                "danger": 0.7,
                "dangerous": 0.7,
                "threat": 0.7,
                "doom": 0.9,
            }
        ),
        EmotionCategory.LOVING: _freeze(
            {
                "love": 1.0,
                "loving": 1.0,
                "beloved": 1.0,
                "adore": 0.9,
                "adoring": 0.9,
                "cherish": 0.9,
                "cherished": 0.9,
                "affection": 0.8,
                "affectionate": 0.8,
                "tender": 0.8,
                "tenderness": 0.8,
                "warm": 0.6,
                "warmth": 0.7,
                "embrace": 0.7,
                "embracing": 0.7,
                "kiss": 0.7,
                "caress": 0.7,
                "heart": 0.6,
                "sweetheart": 0.8,
                "darling": 0.8,
                "dear": 0.6,
                "devotion": 0.9,
                "devoted": 0.9,
                "passion": 0.9,
                "passionate": 0.9,
                "romance": 0.8,
                "romantic": 0.8,
            }
        ),
        EmotionCategory.LONELY: _freeze(
            {
                "lonely": 1.0,
                "loneliness": 1.0,
                "alone": 0.8,
                "solitary": 0.7,
                "solitude": 0.6,
                "isolated": 0.8,
                "isolation": 0.8,
                "abandoned": 0.9,
                "forsaken": 0.9,
                "deserted": 0.8,
                "empty": 0.6,
                "emptiness": 0.7,
                "void": 0.7,
                "lost": 0.6,
                "missing": 0.6,
                "apart": 0.5,
                "distant": 0.5,
                "distance": 0.5,
                "far": 0.4,
                "away": 0.4,
                "gone": 0.5,
                "leaving": 0.5,
                "left": 0.5,
                "farewell": 0.6,
                "goodbye": 0.6,
                "parting": 0.6,
            }
        ),
    }
)


# Circumplex coordinates ------------------------------------------------------
EMOTION_TO_VA: Mapping[EmotionCategory, VAPoint] = _freeze(
    {
        EmotionCategory.HAPPY: VAPoint(valence=0.9, arousal=0.7),
        EmotionCategory.SAD: VAPoint(valence=0.2, arousal=0.3),
        EmotionCategory.ANGRY: VAPoint(valence=0.2, arousal=0.9),
        EmotionCategory.PEACEFUL: VAPoint(valence=0.7, arousal=0.2),
        EmotionCategory.TENSE: VAPoint(valence=0.3, arousal=0.8),
        EmotionCategory.NOSTALGIC: VAPoint(valence=0.4, arousal=0.3),
        EmotionCategory.HOPEFUL: VAPoint(valence=0.8, arousal=0.5),
        EmotionCategory.FEARFUL: VAPoint(valence=0.1, arousal=0.8),
        EmotionCategory.LOVING: VAPoint(valence=0.9, arousal=0.5),
        EmotionCategory.LONELY: VAPoint(valence=0.2, arousal=0.2),
    }
)


# Musical parameters ----------------------------------------------------------
EMOTION_TO_MUSIC: Mapping[EmotionCategory, MusicParams] = _freeze(
    {
        EmotionCategory.HAPPY: MusicParams("major", (100, 140), "high", "G", "loud"),
        EmotionCategory.SAD: MusicParams("minor", (60, 80), "low", "Am", "soft"),
        EmotionCategory.ANGRY: MusicParams("minor", (120, 160), "varied", "Dm", "loud"),
        EmotionCategory.PEACEFUL: MusicParams("major", (60, 90), "middle", "F", "soft"),
        EmotionCategory.TENSE: MusicParams("minor", (80, 110), "middle", "Em", "moderate"),
        EmotionCategory.NOSTALGIC: MusicParams("minor", (70, 90), "middle", "Am", "moderate"),
        EmotionCategory.HOPEFUL: MusicParams("major", (90, 120), "middle", "D", "moderate"),
        EmotionCategory.FEARFUL: MusicParams("minor", (90, 130), "varied", "Dm", "moderate"),
        EmotionCategory.LOVING: MusicParams("major", (70, 100), "middle", "C", "soft"),
        EmotionCategory.LONELY: MusicParams("minor", (60, 80), "low", "Em", "soft"),
    }
)


__all__ = [
    "EMOTION_LEXICON",
    "EMOTION_TO_MUSIC",
    "EMOTION_TO_VA",
    "EmotionCategory",
    "MusicParams",
    "VAPoint",
    "coerce_emotion",
]
