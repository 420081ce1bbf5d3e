"""Prosodic analysis of English poetry.

The main entry point is :func:`analyze_poem`, which reports stress, meter,
rhyme scheme, emotional profile and the most likely fixed form of a poem.
"""

from .core import (
    CMUDictLoader,
    DEFAULT_CMU_LOADER,
    EmotionCategory,
    FootType,
    FormType,
    PoemAnalysis,
    RhymeType,
    analyze_emotion,
    analyze_poem,
    detect_meter,
    detect_poem_form,
    detect_rhyme_scheme,
)
from .errors import DictionaryLoadError, PoemProsodyError

__version__ = "0.1.0"

__all__ = [
    "CMUDictLoader",
    "DEFAULT_CMU_LOADER",
    "DictionaryLoadError",
    "EmotionCategory",
    "FootType",
    "FormType",
    "PoemAnalysis",
    "PoemProsodyError",
    "RhymeType",
    "analyze_emotion",
    "analyze_poem",
    "detect_meter",
    "detect_poem_form",
    "detect_rhyme_scheme",
    "__version__",
]
