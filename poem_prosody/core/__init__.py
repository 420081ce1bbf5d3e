"""Core prosody analysis: stress, meter, rhyme, sound patterns, structure,
emotion and poem form."""

from .cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER
from .emotion import (
    EmotionArc,
    EmotionCategory,
    EmotionalAnalysis,
    MusicParams,
    SentimentScore,
    VAPoint,
    analyze_emotion,
    analyze_emotional_arc,
    analyze_sentiment,
    detect_emotional_keywords,
    map_to_valence_arousal,
    suggest_musical_parameters,
)
from .feet import FootType, LineLength
from .form_detection import (
    FormCategory,
    FormDetectionInput,
    FormDetectionResult,
    FormType,
    create_form_detection_input,
    detect_poem_form,
    get_all_form_types,
    get_form_description,
    get_form_name,
    get_forms_by_category,
    is_sonnet_form,
)
from .meter import (
    MeterAnalysisResult,
    analyze_multi_line_meter,
    calculate_regularity,
    classify_line_length,
    detect_meter,
    levenshtein_distance,
    string_similarity,
)
from .poem import PoemAnalysis, analyze_poem
from .preprocess import PreprocessedPoem, preprocess_poem, tokenize_words
from .rhyme import (
    InternalRhyme,
    RhymeAnalysis,
    RhymeType,
    analyze_rhymes,
    classify_rhyme,
    detect_rhyme_scheme,
    find_internal_rhymes,
    identify_rhyme_form,
    words_rhyme,
)
from .sound_patterns import (
    SoundPatternAnalysis,
    SoundPatternOccurrence,
    SoundPatternType,
    analyze_sound_patterns,
    detect_alliteration,
    detect_assonance,
    detect_consonance,
)
from .stress import (
    StressAnalysis,
    analyze_line_stress,
    analyze_poem_stress,
    classify_foot,
    get_dominant_foot,
    get_line_stress_pattern,
    get_word_stress_pattern,
)
from .structure import (
    Refrain,
    Section,
    SectionType,
    StructureAnalysis,
    analyze_structure,
    detect_refrains,
)

__all__ = [
    "CMUDictLoader",
    "DEFAULT_CMU_LOADER",
    "EmotionArc",
    "EmotionCategory",
    "EmotionalAnalysis",
    "FootType",
    "FormCategory",
    "FormDetectionInput",
    "FormDetectionResult",
    "FormType",
    "InternalRhyme",
    "LineLength",
    "MeterAnalysisResult",
    "MusicParams",
    "PoemAnalysis",
    "PreprocessedPoem",
    "Refrain",
    "RhymeAnalysis",
    "RhymeType",
    "Section",
    "SectionType",
    "SentimentScore",
    "SoundPatternAnalysis",
    "SoundPatternOccurrence",
    "SoundPatternType",
    "StressAnalysis",
    "StructureAnalysis",
    "VAPoint",
    "analyze_emotion",
    "analyze_emotional_arc",
    "analyze_line_stress",
    "analyze_multi_line_meter",
    "analyze_poem",
    "analyze_poem_stress",
    "analyze_rhymes",
    "analyze_sentiment",
    "analyze_sound_patterns",
    "analyze_structure",
    "calculate_regularity",
    "classify_foot",
    "classify_line_length",
    "classify_rhyme",
    "create_form_detection_input",
    "detect_alliteration",
    "detect_assonance",
    "detect_consonance",
    "detect_emotional_keywords",
    "detect_meter",
    "detect_poem_form",
    "detect_refrains",
    "detect_rhyme_scheme",
    "find_internal_rhymes",
    "get_all_form_types",
    "get_dominant_foot",
    "get_form_description",
    "get_form_name",
    "get_forms_by_category",
    "get_line_stress_pattern",
    "get_word_stress_pattern",
    "identify_rhyme_form",
    "is_sonnet_form",
    "levenshtein_distance",
    "map_to_valence_arousal",
    "preprocess_poem",
    "string_similarity",
    "suggest_musical_parameters",
    "tokenize_words",
    "words_rhyme",
]
