"""Whole-poem analysis tying together stress, meter, rhyme, sound, structure,
emotion and form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from poem_prosody.utils.observability import (
    add_span_attributes,
    create_histogram,
    get_logger,
    start_span,
)

from .cmudict_loader import CMUDictLoader, DEFAULT_CMU_LOADER
from .emotion import EmotionalAnalysis, analyze_emotion
from .feet import FootType
from .form_detection import FormDetectionInput, FormDetectionResult, detect_poem_form
from .meter import MeterAnalysisResult, analyze_multi_line_meter
from .preprocess import preprocess_poem
from .rhyme import RhymeAnalysis, analyze_rhymes, detect_stanza_rhyme_schemes
from .sound_patterns import SoundPatternAnalysis, analyze_sound_patterns
from .stress import StressAnalysis, analyze_poem_stress, get_dominant_foot
from .structure import StructureAnalysis, analyze_structure

_logger = get_logger(__name__).bind(component="poem")

_STAGE_SECONDS = create_histogram(
    "poem_prosody_analysis_seconds",
    "Time spent in each poem analysis stage",
    label_names=("stage",),
)


@dataclass(frozen=True)
class PoemAnalysis:
    stanzas: Tuple[Tuple[str, ...], ...]
    line_stress: Tuple[StressAnalysis, ...]
    syllables_per_line: Tuple[int, ...]
    dominant_foot: FootType
    meter: MeterAnalysisResult
    rhyme_scheme: str
    stanza_rhyme_schemes: Tuple[str, ...]
    rhyme: RhymeAnalysis
    sound_patterns: SoundPatternAnalysis
    structure: StructureAnalysis
    emotion: EmotionalAnalysis
    form: FormDetectionResult

    @property
    def line_count(self) -> int:
        return len(self.line_stress)

    @property
    def stanza_count(self) -> int:
        return len(self.stanzas)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line_count": self.line_count,
            "stanza_count": self.stanza_count,
            "stanzas": [list(stanza) for stanza in self.stanzas],
            "line_stress": [analysis.as_dict() for analysis in self.line_stress],
            "syllables_per_line": list(self.syllables_per_line),
            "dominant_foot": self.dominant_foot.value,
            "meter": self.meter.as_dict(),
            "rhyme_scheme": self.rhyme_scheme,
            "stanza_rhyme_schemes": list(self.stanza_rhyme_schemes),
            "rhyme": self.rhyme.as_dict(),
            "sound_patterns": self.sound_patterns.as_dict(),
            "structure": self.structure.as_dict(),
            "emotion": self.emotion.as_dict(),
            "form": self.form.as_dict(),
        }


def analyze_poem(text: Optional[str], cmu_loader: Optional[CMUDictLoader] = None) -> PoemAnalysis:
    """Run the full pipeline over ``text``.

    Syllable counts come from the per-line stress strings, so dictionary
    pronunciations and estimated words are counted the same way.
    """

    loader = cmu_loader if cmu_loader is not None else DEFAULT_CMU_LOADER

    with start_span("poem_prosody.analyze_poem") as span:
        with _STAGE_SECONDS.labels(stage="preprocess").time():
            poem = preprocess_poem(text or "")
        add_span_attributes(
            span,
            {"poem.lines": poem.line_count, "poem.stanzas": len(poem.stanzas)},
        )

        with _STAGE_SECONDS.labels(stage="stress").time():
            line_stress = analyze_poem_stress(poem.tokens, loader)
            dominant_foot = get_dominant_foot(line_stress)

        with _STAGE_SECONDS.labels(stage="meter").time():
            patterns: List[str] = [analysis.pattern for analysis in line_stress if analysis.pattern]
            meter = analyze_multi_line_meter(patterns)

        with _STAGE_SECONDS.labels(stage="rhyme").time():
            rhymes = analyze_rhymes(poem.lines, loader)
            rhyme_scheme = rhymes.scheme
            stanza_schemes = detect_stanza_rhyme_schemes(poem.stanzas, loader)

        with _STAGE_SECONDS.labels(stage="sound").time():
            sound_patterns = analyze_sound_patterns(poem.lines, loader)

        with _STAGE_SECONDS.labels(stage="structure").time():
            structure = analyze_structure(poem.stanzas, loader)

        with _STAGE_SECONDS.labels(stage="emotion").time():
            emotion = analyze_emotion(poem.normalized, poem.stanzas)

        syllables = tuple(len(analysis.pattern) for analysis in line_stress)
        with _STAGE_SECONDS.labels(stage="form").time():
            form = detect_poem_form(
                FormDetectionInput.from_counts(
                    line_count=poem.line_count,
                    stanza_count=len(poem.stanzas),
                    lines_per_stanza=[len(stanza) for stanza in poem.stanzas],
                    meter_foot_type=meter.foot_type,
                    meter_name=meter.meter_name,
                    meter_confidence=meter.confidence,
                    rhyme_scheme=rhyme_scheme,
                    syllables_per_line=syllables,
                    regularity=meter.regularity,
                )
            )

        add_span_attributes(
            span,
            {"poem.meter": meter.meter_name, "poem.form": form.form_type.value},
        )

    _logger.debug(
        "Poem analysed",
        context={
            "lines": poem.line_count,
            "meter": meter.meter_name,
            "rhyme_scheme": rhyme_scheme,
            "form": form.form_type.value,
        },
    )
    return PoemAnalysis(
        stanzas=poem.stanzas,
        line_stress=tuple(line_stress),
        syllables_per_line=syllables,
        dominant_foot=dominant_foot,
        meter=meter,
        rhyme_scheme=rhyme_scheme,
        stanza_rhyme_schemes=tuple(stanza_schemes),
        rhyme=rhymes,
        sound_patterns=sound_patterns,
        structure=structure,
        emotion=emotion,
        form=form,
    )


__all__ = ["PoemAnalysis", "analyze_poem"]
