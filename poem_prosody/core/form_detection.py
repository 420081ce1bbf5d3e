"""Poem form classification over the signatures in :mod:`.form_catalog`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from poem_prosody.utils.observability import get_logger

from .feet import FOOT_ADJECTIVES, FootType, coerce_foot
from .form_catalog import (
    ASPECT_LINE_COUNT,
    ASPECT_METER,
    ASPECT_RHYME,
    ASPECT_STANZA,
    ASPECT_SYLLABLES,
    FORM_CATALOG,
    SONNET_FORMS,
    FormCategory,
    FormSignature,
    FormType,
)

_logger = get_logger(__name__).bind(component="form_detection")


def _int_tuple(values: Optional[Iterable[Any]]) -> Tuple[int, ...]:
    return tuple(int(value) for value in values or ())


def _foot_from_meter_name(meter_name: str) -> FootType:
    lowered = (meter_name or "").strip().lower()
    for foot, adjective in FOOT_ADJECTIVES.items():
        if foot != FootType.UNKNOWN and lowered.startswith(adjective):
            return foot
    return FootType.UNKNOWN


@dataclass(frozen=True)
class FormDetectionInput:
    """Structural summary of a poem.

    ``avg_syllables_per_line`` is derived from ``syllables_per_line`` when it
    is not supplied.
    """

    line_count: int = 0
    stanza_count: int = 0
    lines_per_stanza: Tuple[int, ...] = ()
    meter_foot_type: FootType = FootType.UNKNOWN
    meter_name: str = ""
    meter_confidence: float = 0.0
    rhyme_scheme: str = ""
    syllables_per_line: Tuple[int, ...] = ()
    avg_syllables_per_line: Optional[float] = None
    regularity: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines_per_stanza", _int_tuple(self.lines_per_stanza))
        object.__setattr__(self, "syllables_per_line", _int_tuple(self.syllables_per_line))
        object.__setattr__(self, "meter_foot_type", coerce_foot(self.meter_foot_type))
        object.__setattr__(self, "meter_name", self.meter_name or "")
        object.__setattr__(self, "rhyme_scheme", self.rhyme_scheme or "")
        if self.avg_syllables_per_line is None:
            average = (
                sum(self.syllables_per_line) / self.line_count if self.line_count > 0 else 0.0
            )
            object.__setattr__(self, "avg_syllables_per_line", average)

    @classmethod
    def from_counts(
        cls,
        line_count: Any,
        stanza_count: Any,
        lines_per_stanza: Optional[Iterable[Any]],
        meter_foot_type: object,
        meter_name: Optional[str],
        meter_confidence: Any,
        rhyme_scheme: Optional[str],
        syllables_per_line: Optional[Iterable[Any]],
        regularity: Any,
    ) -> "FormDetectionInput":
        """Build an input from loosely typed values, clamping counts at zero."""

        return cls(
            line_count=max(0, int(line_count or 0)),
            stanza_count=max(0, int(stanza_count or 0)),
            lines_per_stanza=_int_tuple(lines_per_stanza),
            meter_foot_type=coerce_foot(meter_foot_type),
            meter_name=str(meter_name or ""),
            meter_confidence=float(meter_confidence or 0.0),
            rhyme_scheme=str(rhyme_scheme or ""),
            syllables_per_line=_int_tuple(syllables_per_line),
            regularity=float(regularity or 0.0),
        )

    @property
    def resolved_foot_type(self) -> FootType:
        """The foot type, falling back to the adjective leading ``meter_name``."""

        if self.meter_foot_type != FootType.UNKNOWN:
            return self.meter_foot_type
        return _foot_from_meter_name(self.meter_name)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line_count": self.line_count,
            "stanza_count": self.stanza_count,
            "lines_per_stanza": list(self.lines_per_stanza),
            "meter_foot_type": self.meter_foot_type.value,
            "meter_name": self.meter_name,
            "meter_confidence": self.meter_confidence,
            "rhyme_scheme": self.rhyme_scheme,
            "syllables_per_line": list(self.syllables_per_line),
            "avg_syllables_per_line": self.avg_syllables_per_line,
            "regularity": self.regularity,
        }


@dataclass(frozen=True)
class FormEvidence:
    line_count_match: bool = False
    stanza_structure_match: bool = False
    meter_match: bool = False
    rhyme_scheme_match: bool = False
    syllable_pattern_match: bool = False
    notes: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line_count_match": self.line_count_match,
            "stanza_structure_match": self.stanza_structure_match,
            "meter_match": self.meter_match,
            "rhyme_scheme_match": self.rhyme_scheme_match,
            "syllable_pattern_match": self.syllable_pattern_match,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class AlternativeForm:
    form_type: FormType
    form_name: str
    confidence: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "form_type": self.form_type.value,
            "form_name": self.form_name,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class FormDetectionResult:
    form_type: FormType
    form_name: str
    category: FormCategory
    confidence: float
    evidence: FormEvidence = field(default_factory=FormEvidence)
    alternatives: Tuple[AlternativeForm, ...] = ()
    description: str = ""

    @classmethod
    def unknown(cls, description: str) -> "FormDetectionResult":
        return cls(
            form_type=FormType.UNKNOWN,
            form_name="Unknown Form",
            category=FormCategory.UNKNOWN,
            confidence=0.0,
            description=description,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "form_type": self.form_type.value,
            "form_name": self.form_name,
            "category": self.category.value,
            "confidence": self.confidence,
            "evidence": self.evidence.as_dict(),
            "alternatives": [alternative.as_dict() for alternative in self.alternatives],
            "description": self.description,
        }


_EVIDENCE_FIELDS = {
    ASPECT_LINE_COUNT: "line_count_match",
    ASPECT_STANZA: "stanza_structure_match",
    ASPECT_METER: "meter_match",
    ASPECT_RHYME: "rhyme_scheme_match",
    ASPECT_SYLLABLES: "syllable_pattern_match",
}


def _note_context(form_input: FormDetectionInput) -> Dict[str, Any]:
    sizes = form_input.lines_per_stanza
    foot = form_input.resolved_foot_type
    return {
        "line_count": form_input.line_count,
        "stanza_count": form_input.stanza_count,
        "avg_syllables": form_input.avg_syllables_per_line,
        "total_syllables": sum(form_input.syllables_per_line),
        "syllable_pattern": "-".join(str(count) for count in form_input.syllables_per_line),
        "avg_stanza_length": sum(sizes) / len(sizes) if sizes else 0.0,
        "foot": foot.value,
    }


def score_form(
    signature: FormSignature, form_input: FormDetectionInput
) -> Tuple[float, FormEvidence]:
    """Sum the weight of the first satisfied tier of every criterion, capped at 1."""

    context = _note_context(form_input)
    confidence = signature.base_confidence
    flags = {name: False for name in _EVIDENCE_FIELDS.values()}
    notes: List[str] = []

    for criterion in signature.criteria:
        for tier in criterion.tiers:
            if not tier.predicate(form_input):
                continue
            confidence += tier.weight
            notes.append(tier.note.format(**context))
            if tier.counts_as_evidence:
                flags[_EVIDENCE_FIELDS[criterion.aspect]] = True
            break

    if (
        signature.strong_meter_threshold is not None
        and form_input.meter_confidence > signature.strong_meter_threshold
    ):
        confidence *= signature.strong_meter_damping
        notes.append("Strong meter detected")

    return min(1.0, confidence), FormEvidence(notes=tuple(notes), **flags)


def detect_poem_form(form_input: FormDetectionInput) -> FormDetectionResult:
    """Classify ``form_input`` against every catalogued form.

    The best-scoring form wins, earlier catalog entries breaking ties. Every
    other form with a positive score is reported as an alternative.
    """

    if form_input.line_count <= 0:
        return FormDetectionResult.unknown("No content to analyze.")

    scored = []
    for signature in FORM_CATALOG:
        confidence, evidence = score_form(signature, form_input)
        if confidence > 0:
            scored.append((signature, confidence, evidence))

    if not scored:
        return FormDetectionResult.unknown("Could not identify a specific poem form.")

    scored.sort(key=lambda item: item[1], reverse=True)
    best, confidence, evidence = scored[0]
    alternatives = tuple(
        AlternativeForm(form_type=signature.form_type, form_name=signature.name, confidence=score)
        for signature, score, _ in scored[1:]
    )

    _logger.debug(
        "Detected poem form",
        context={
            "form": best.form_type.value,
            "confidence": round(confidence, 3),
            "candidates": {signature.form_type.value: round(score, 3) for signature, score, _ in scored},
        },
    )
    return FormDetectionResult(
        form_type=best.form_type,
        form_name=best.name,
        category=best.category,
        confidence=confidence,
        evidence=evidence,
        alternatives=alternatives,
        description=best.description,
    )


# Catalog queries ---------------------------------------------------------------
def _coerce_form(value: object) -> FormType:
    if isinstance(value, FormType):
        return value
    try:
        return FormType(str(value).strip().lower())
    except ValueError:
        return FormType.UNKNOWN


def _signature_for(form_type: object) -> Optional[FormSignature]:
    wanted = _coerce_form(form_type)
    for signature in FORM_CATALOG:
        if signature.form_type == wanted:
            return signature
    return None


def get_form_name(form_type: object) -> str:
    signature = _signature_for(form_type)
    return signature.name if signature is not None else "Unknown Form"


def get_form_description(form_type: object) -> str:
    signature = _signature_for(form_type)
    return signature.description if signature is not None else ""


def get_all_form_types() -> List[FormType]:
    return [signature.form_type for signature in FORM_CATALOG]


def get_forms_by_category(category: object) -> List[FormType]:
    wanted = str(category).strip().lower()
    return [signature.form_type for signature in FORM_CATALOG if signature.category.value == wanted]


def is_sonnet_form(form_type: object) -> bool:
    return _coerce_form(form_type) in SONNET_FORMS


def create_form_detection_input(
    line_count: int,
    stanza_count: int,
    lines_per_stanza: Sequence[int],
    meter_foot_type: object,
    meter_name: str,
    meter_confidence: float,
    rhyme_scheme: str,
    syllables_per_line: Sequence[int],
    regularity: float,
) -> FormDetectionInput:
    return FormDetectionInput.from_counts(
        line_count,
        stanza_count,
        lines_per_stanza,
        meter_foot_type,
        meter_name,
        meter_confidence,
        rhyme_scheme,
        syllables_per_line,
        regularity,
    )


__all__ = [
    "AlternativeForm",
    "FormCategory",
    "FormDetectionInput",
    "FormDetectionResult",
    "FormEvidence",
    "FormType",
    "create_form_detection_input",
    "detect_poem_form",
    "get_all_form_types",
    "get_form_description",
    "get_form_name",
    "get_forms_by_category",
    "is_sonnet_form",
    "score_form",
]
