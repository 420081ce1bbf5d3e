"""Declarative signatures for the poem forms recognised by form detection.

Each :class:`FormSignature` lists criteria. A criterion covers one aspect
(line count, rhyme, meter, syllables or stanza shape) and holds tiers
ordered from strictest to loosest; the first tier whose predicate holds
contributes its weight and note. Signatures are listed from most to least
specific, which is also the tie-break order when two forms score the same.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Tuple

from .feet import FootType

if TYPE_CHECKING:  # pragma: no cover
    from .form_detection import FormDetectionInput


class FormType(str, Enum):
    SHAKESPEAREAN_SONNET = "shakespearean_sonnet"
    PETRARCHAN_SONNET = "petrarchan_sonnet"
    SPENSERIAN_SONNET = "spenserian_sonnet"
    SONNET = "sonnet"
    HAIKU = "haiku"
    TANKA = "tanka"
    LIMERICK = "limerick"
    BALLAD = "ballad"
    COMMON_METER = "common_meter"
    VILLANELLE = "villanelle"
    SESTINA = "sestina"
    ODE = "ode"
    HEROIC_COUPLET = "heroic_couplet"
    COUPLET = "couplet"
    TERZA_RIMA = "terza_rima"
    TERCET = "tercet"
    QUATRAIN = "quatrain"
    CINQUAIN = "cinquain"
    BLANK_VERSE = "blank_verse"
    FREE_VERSE = "free_verse"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


class FormCategory(str, Enum):
    FIXED_FORM = "fixed_form"
    SYLLABIC = "syllabic"
    STANZAIC = "stanzaic"
    METRICAL = "metrical"
    FREE = "free"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


Predicate = Callable[["FormDetectionInput"], bool]

ASPECT_LINE_COUNT = "line_count"
ASPECT_RHYME = "rhyme"
ASPECT_METER = "meter"
ASPECT_SYLLABLES = "syllables"
ASPECT_STANZA = "stanza"


@dataclass(frozen=True)
class Tier:
    predicate: Predicate
    weight: float
    note: str
    counts_as_evidence: bool = True


@dataclass(frozen=True)
class Criterion:
    aspect: str
    tiers: Tuple[Tier, ...]


@dataclass(frozen=True)
class FormSignature:
    form_type: FormType
    name: str
    category: FormCategory
    description: str
    criteria: Tuple[Criterion, ...]
    base_confidence: float = 0.0
    strong_meter_threshold: Optional[float] = None
    strong_meter_damping: float = 1.0


def _criterion(aspect: str, *tiers: Tier) -> Criterion:
    return Criterion(aspect=aspect, tiers=tuple(tiers))


# Scheme helpers ----------------------------------------------------------------
def _scheme(form: "FormDetectionInput") -> str:
    # Lowercase letters past Z are distinct groups; only an all-lowercase
    # scheme is read as upper case.
    scheme = form.rhyme_scheme or ""
    return scheme.upper() if scheme.islower() else scheme


def _distinct_letters(form: "FormDetectionInput") -> int:
    return len(set(_scheme(form)))


def _pairs_rhyme(scheme: str) -> bool:
    return all(scheme[index] == scheme[index + 1] for index in range(0, len(scheme) - 1, 2))


# Line count --------------------------------------------------------------------
def line_count_is(expected: int) -> Predicate:
    return lambda form: form.line_count == expected


def line_count_between(lower: int, upper: int) -> Predicate:
    return lambda form: lower <= form.line_count <= upper


def line_count_at_least(minimum: int) -> Predicate:
    return lambda form: form.line_count >= minimum


def line_count_divisible(divisor: int, minimum: int) -> Predicate:
    return lambda form: form.line_count % divisor == 0 and form.line_count >= minimum


def line_count_fits_tercets() -> Predicate:
    return lambda form: form.line_count % 3 in (0, 1)


# Rhyme -------------------------------------------------------------------------
def rhyme_is(*schemes: str) -> Predicate:
    wanted = {scheme.upper() for scheme in schemes}
    return lambda form: _scheme(form) in wanted


def rhyme_matches(*patterns: str) -> Predicate:
    compiled = [re.compile(pattern) for pattern in patterns]
    return lambda form: any(regex.search(_scheme(form)) for regex in compiled)


def rhyme_ends_with(suffix: str) -> Predicate:
    return lambda form: _scheme(form).endswith(suffix.upper())


def rhyme_prefix_matches(pattern: str, length: int) -> Predicate:
    regex = re.compile(pattern)
    return lambda form: bool(regex.match(_scheme(form)[:length]))


def rhyme_density_below(limit: float, min_length: int) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        scheme = _scheme(form)
        return len(scheme) >= min_length and _distinct_letters(form) / len(scheme) < limit

    return predicate


def rhyme_density_at_least(limit: float) -> Predicate:
    return lambda form: _distinct_letters(form) / max(1, len(_scheme(form))) >= limit


def rhyme_density_strictly_between(lower: float, upper: float) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        scheme = _scheme(form)
        if not scheme:
            return False
        return lower < _distinct_letters(form) / len(scheme) < upper

    return predicate


def rhyme_letters_at_least(slack: int) -> Predicate:
    """Distinct letters fall at most ``slack`` short of the scheme length."""

    return lambda form: _distinct_letters(form) >= len(_scheme(form)) - slack


def rhyme_length_at_least(minimum: int) -> Predicate:
    return lambda form: len(_scheme(form)) >= minimum


def rhymes_in_pairs(min_length: int) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        scheme = _scheme(form)
        return len(scheme) >= min_length and _pairs_rhyme(scheme)

    return predicate


def rhymes_as_couplets() -> Predicate:
    regex = re.compile(r"^(AA|BB|CC|DD|EE|FF|GG|HH|II|JJ)+$")
    return lambda form: bool(regex.match(re.sub(r"[^A-Z]", "", _scheme(form))))


def rhymes_like_limerick() -> Predicate:
    regex = re.compile(r"^[A-Z]{2}[B-Z]{2}[A-Z]$")

    def predicate(form: "FormDetectionInput") -> bool:
        scheme = _scheme(form)
        return (
            bool(regex.match(scheme))
            and scheme[0] == scheme[1] == scheme[4]
            and scheme[2] == scheme[3]
        )

    return predicate


def rhymes_interlocking_tercets() -> Predicate:
    """The middle line of each tercet rhymes with the first of the next."""

    def predicate(form: "FormDetectionInput") -> bool:
        scheme = _scheme(form)
        if len(scheme) < 6:
            return False
        return all(scheme[index + 1] == scheme[index + 3] for index in range(0, len(scheme) - 3, 3))

    return predicate


def rhyme_variety_at_most(distinct: int, min_length: int) -> Predicate:
    return lambda form: len(_scheme(form)) >= min_length and _distinct_letters(form) <= distinct


# Meter -------------------------------------------------------------------------
def meter_is(foot: FootType, line_length: Optional[str] = None) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        if form.resolved_foot_type != foot:
            return False
        return line_length is None or line_length in (form.meter_name or "").lower()

    return predicate


def meter_in(*feet: FootType) -> Predicate:
    return lambda form: form.resolved_foot_type in feet


def meter_known() -> Predicate:
    return lambda form: form.resolved_foot_type != FootType.UNKNOWN


def regularity_below(limit: float) -> Predicate:
    return lambda form: form.regularity < limit


# Syllables ---------------------------------------------------------------------
def syllables_match(expected: Sequence[int], tolerance: int) -> Predicate:
    expected = tuple(expected)

    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        if len(actual) != len(expected):
            return False
        return all(abs(count - target) <= tolerance for count, target in zip(actual, expected))

    return predicate


def syllable_total_between(lines: int, lower: int, upper: int) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        return len(actual) == lines and lower <= sum(actual) <= upper

    return predicate


def syllables_alternate(long: int, short: int, tolerance: int, min_lines: int = 4) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        if len(actual) < min_lines:
            return False
        return all(
            abs(count - (long if index % 2 == 0 else short)) <= tolerance
            for index, count in enumerate(actual)
        )

    return predicate


def avg_syllables_between(lower: float, upper: float) -> Predicate:
    return lambda form: lower <= form.avg_syllables_per_line <= upper


def syllable_spread_at_least(spread: int, min_lines: int = 3) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        return len(actual) >= min_lines and max(actual) - min(actual) >= spread

    return predicate


def syllables_long_short_long() -> Predicate:
    """Limerick shape: lines 1, 2 and 5 longer than the two short middle lines."""

    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        if len(actual) != 5:
            return False
        s1, s2, s3, s4, s5 = actual
        return s1 > s3 and s2 > s4 and s5 > s3 and s3 < 7 and s4 < 7

    return predicate


def syllables_build_then_taper() -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        actual = form.syllables_per_line
        if len(actual) != 5:
            return False
        s1, s2, s3, s4, s5 = actual
        return s1 < s2 < s3 < s4 and s5 < s4

    return predicate


# Stanzas -----------------------------------------------------------------------
def stanzas_all(size: int) -> Predicate:
    # Vacuously true when no stanza sizes are known.
    return lambda form: all(lines == size for lines in form.lines_per_stanza)


def stanza_shape(*sizes: int) -> Predicate:
    return lambda form: form.stanza_count == len(sizes) and tuple(form.lines_per_stanza) == sizes


def stanza_count_at_least(minimum: int) -> Predicate:
    return lambda form: form.stanza_count >= minimum


def stanzas_include(size: int, min_stanzas: int) -> Predicate:
    return lambda form: form.stanza_count >= min_stanzas and size in form.lines_per_stanza


def avg_stanza_length_at_least(minimum: float) -> Predicate:
    def predicate(form: "FormDetectionInput") -> bool:
        sizes = form.lines_per_stanza
        return bool(sizes) and sum(sizes) / len(sizes) >= minimum

    return predicate


def stanza_sizes_vary() -> Predicate:
    return lambda form: len(form.lines_per_stanza) >= 2 and len(set(form.lines_per_stanza)) > 1


# Shared tiers ------------------------------------------------------------------
def _iambic_pentameter(weight: float) -> Tier:
    return Tier(meter_is(FootType.IAMB, "pentameter"), weight, "Uses iambic pentameter")


def _fourteen_lines(weight: float, note: str = "Has 14 lines") -> Tier:
    return Tier(line_count_is(14), weight, note)


def _any_meter(weight: float) -> Criterion:
    return _criterion(ASPECT_METER, Tier(meter_known(), weight, "Uses {foot} meter"))


_QUATRAIN_SCHEMES = (r"^(ABAB)+$", r"^(ABCB)+$")


# Catalog -----------------------------------------------------------------------
FORM_CATALOG: Tuple[FormSignature, ...] = (
    FormSignature(
        form_type=FormType.SHAKESPEAREAN_SONNET,
        name="Shakespearean Sonnet",
        category=FormCategory.FIXED_FORM,
        description=(
            "A 14-line poem in iambic pentameter with rhyme scheme ABABCDCDEFEFGG "
            "(three quatrains and a couplet)."
        ),
        criteria=(
            _criterion(
                ASPECT_LINE_COUNT,
                _fourteen_lines(0.25),
                Tier(line_count_between(12, 16), 0.1, "Has {line_count} lines (expected 14)", False),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_is("ABABCDCDEFEFGG"), 0.35, "Perfect Shakespearean rhyme scheme ABABCDCDEFEFGG"),
                Tier(rhyme_matches(r"^ABAB.?CDCD.?EFEF.?GG$"), 0.25, "Approximate Shakespearean rhyme scheme"),
                Tier(rhyme_ends_with("GG"), 0.1, "Ends with couplet", False),
            ),
            _criterion(
                ASPECT_METER,
                _iambic_pentameter(0.25),
                Tier(meter_is(FootType.IAMB), 0.1, "Uses iambic meter", False),
            ),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_match([10] * 14, 2), 0.15, "~10 syllables per line"),
                Tier(
                    avg_syllables_between(8, 12),
                    0.05,
                    "Average {avg_syllables:.1f} syllables per line",
                    False,
                ),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.PETRARCHAN_SONNET,
        name="Petrarchan Sonnet",
        category=FormCategory.FIXED_FORM,
        description="A 14-line poem with an octave (ABBAABBA) and sestet (CDCDCD, CDECDE, or similar).",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, _fourteen_lines(0.25)),
            _criterion(
                ASPECT_RHYME,
                Tier(
                    rhyme_is("ABBAABBACDCDCD", "ABBAABBACDECDE", "ABBAABBACDDCEE", "ABBAABBACDDECE"),
                    0.35,
                    "Perfect Petrarchan rhyme scheme",
                ),
                Tier(rhyme_matches(r"^ABBAABBA"), 0.25, "Has Petrarchan octave ABBAABBA"),
            ),
            _criterion(ASPECT_METER, _iambic_pentameter(0.25)),
            _criterion(ASPECT_STANZA, Tier(stanza_shape(8, 6), 0.15, "Has octave and sestet structure")),
        ),
    ),
    FormSignature(
        form_type=FormType.SPENSERIAN_SONNET,
        name="Spenserian Sonnet",
        category=FormCategory.FIXED_FORM,
        description="A 14-line poem with interlocking rhyme scheme ABABBCBCCDCDEE.",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, _fourteen_lines(0.25)),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_is("ABABBCBCCDCDEE"), 0.4, "Perfect Spenserian rhyme scheme ABABBCBCCDCDEE"),
                Tier(rhyme_matches(r"^ABAB.?BCBC.?CDCD.?EE$"), 0.25, "Approximate Spenserian interlocking scheme"),
            ),
            _criterion(ASPECT_METER, _iambic_pentameter(0.25)),
        ),
    ),
    FormSignature(
        form_type=FormType.HAIKU,
        name="Haiku",
        category=FormCategory.SYLLABIC,
        description="A Japanese form with 3 lines of 5-7-5 syllables (17 total), traditionally about nature.",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_is(3), 0.3, "Has 3 lines")),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_match([5, 7, 5], 0), 0.6, "Perfect 5-7-5 syllable pattern"),
                Tier(syllables_match([5, 7, 5], 1), 0.4, "Near 5-7-5 pattern ({syllable_pattern})"),
                Tier(
                    syllable_total_between(3, 15, 19),
                    0.2,
                    "Total {total_syllables} syllables (near 17)",
                    False,
                ),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_letters_at_least(0), 0.1, "No rhyme (typical for haiku)", False),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.TANKA,
        name="Tanka",
        category=FormCategory.SYLLABIC,
        description="A Japanese form with 5 lines of 5-7-5-7-7 syllables (31 total).",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_is(5), 0.25, "Has 5 lines")),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_match([5, 7, 5, 7, 7], 0), 0.6, "Perfect 5-7-5-7-7 syllable pattern"),
                Tier(syllables_match([5, 7, 5, 7, 7], 1), 0.4, "Near 5-7-5-7-7 pattern ({syllable_pattern})"),
                Tier(
                    syllable_total_between(5, 28, 34),
                    0.15,
                    "Total {total_syllables} syllables (near 31)",
                    False,
                ),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.CINQUAIN,
        name="Cinquain",
        category=FormCategory.SYLLABIC,
        description="A 5-line poem with syllable pattern 2-4-6-8-2.",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_is(5), 0.3, "Has 5 lines")),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_match([2, 4, 6, 8, 2], 0), 0.5, "Perfect 2-4-6-8-2 syllable pattern"),
                Tier(syllables_match([2, 4, 6, 8, 2], 1), 0.35, "Near 2-4-6-8-2 syllable pattern"),
                Tier(syllables_build_then_taper(), 0.2, "Has building-tapering structure", False),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_letters_at_least(1), 0.1, "Minimal rhyme (typical for cinquain)", False),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.LIMERICK,
        name="Limerick",
        category=FormCategory.FIXED_FORM,
        description="A 5-line humorous poem with AABBA rhyme scheme and anapestic meter.",
        criteria=(
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_is(5), 0.25, "Has 5 lines")),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_is("AABBA"), 0.35, "Perfect AABBA rhyme scheme"),
                Tier(rhymes_like_limerick(), 0.25, "Has AABBA-style rhyme pattern"),
            ),
            _criterion(
                ASPECT_METER,
                Tier(meter_is(FootType.ANAPEST), 0.25, "Uses anapestic meter"),
                Tier(meter_in(FootType.IAMB, FootType.DACTYL), 0.1, "Uses compatible meter", False),
            ),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_long_short_long(), 0.15, "Has long-long-short-short-long structure"),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.VILLANELLE,
        name="Villanelle",
        category=FormCategory.FIXED_FORM,
        description="A 19-line poem with 5 tercets and a quatrain, using two refrains and ABA rhyme throughout.",
        criteria=(
            _criterion(
                ASPECT_LINE_COUNT,
                Tier(line_count_is(19), 0.3, "Has 19 lines"),
                Tier(line_count_between(17, 21), 0.1, "Has {line_count} lines (near 19)", False),
            ),
            _criterion(
                ASPECT_STANZA,
                Tier(stanza_shape(3, 3, 3, 3, 3, 4), 0.3, "Has 5 tercets and 1 quatrain"),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(
                    rhyme_matches(r"^(ABA){5}ABAA$", r"^A.A(.{3}){4}.{4}$"),
                    0.3,
                    "Has villanelle ABA rhyme pattern",
                ),
                Tier(rhyme_prefix_matches(r"^(ABA)+", 15), 0.15, "Has ABA tercet pattern", False),
            ),
            _criterion(ASPECT_METER, _iambic_pentameter(0.1)),
        ),
    ),
    FormSignature(
        form_type=FormType.SESTINA,
        name="Sestina",
        category=FormCategory.FIXED_FORM,
        description="A 39-line poem with 6 six-line stanzas and a 3-line envoi, using end-word rotation.",
        criteria=(
            _criterion(
                ASPECT_LINE_COUNT,
                Tier(line_count_is(39), 0.35, "Has 39 lines"),
                Tier(line_count_between(36, 42), 0.15, "Has {line_count} lines (near 39)", False),
            ),
            _criterion(
                ASPECT_STANZA,
                Tier(stanza_shape(6, 6, 6, 6, 6, 6, 3), 0.35, "Has 6 sextets and 3-line envoi"),
                Tier(stanzas_include(6, 6), 0.15, "Has six-line stanzas", False),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(
                    rhyme_variety_at_most(8, 36),
                    0.2,
                    "Has limited rhyme variety (suggests end-word rotation)",
                    False,
                ),
            ),
            _criterion(ASPECT_METER, Tier(meter_is(FootType.IAMB), 0.1, "Uses iambic meter")),
        ),
    ),
    FormSignature(
        form_type=FormType.TERZA_RIMA,
        name="Terza Rima",
        category=FormCategory.FIXED_FORM,
        description="Interlocking tercets with ABA BCB CDC... rhyme scheme.",
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanzas_all(3), 0.25, "Has 3-line stanzas (tercets)")),
            _criterion(
                ASPECT_RHYME,
                Tier(rhymes_interlocking_tercets(), 0.4, "Has interlocking ABA BCB rhyme pattern"),
            ),
            _criterion(ASPECT_METER, _iambic_pentameter(0.2)),
            _criterion(
                ASPECT_LINE_COUNT,
                Tier(line_count_fits_tercets(), 0.1, "Line count compatible with tercets"),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.HEROIC_COUPLET,
        name="Heroic Couplet",
        category=FormCategory.METRICAL,
        description="Pairs of rhyming lines in iambic pentameter.",
        criteria=(
            _criterion(
                ASPECT_RHYME,
                Tier(rhymes_as_couplets(), 0.35, "Has rhyming couplet pattern"),
                Tier(rhymes_in_pairs(4), 0.3, "Lines rhyme in pairs"),
            ),
            _criterion(
                ASPECT_METER,
                _iambic_pentameter(0.4),
                Tier(meter_is(FootType.IAMB), 0.2, "Uses iambic meter", False),
            ),
            _criterion(ASPECT_SYLLABLES, Tier(avg_syllables_between(9, 11), 0.15, "~10 syllables per line")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_divisible(2, 2), 0.1, "Even number of lines")),
        ),
    ),
    FormSignature(
        form_type=FormType.BLANK_VERSE,
        name="Blank Verse",
        category=FormCategory.METRICAL,
        description="Unrhymed iambic pentameter.",
        criteria=(
            _criterion(
                ASPECT_METER,
                _iambic_pentameter(0.45),
                Tier(meter_is(FootType.IAMB), 0.2, "Uses iambic meter", False),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_density_at_least(0.8), 0.35, "Unrhymed or minimal rhyme"),
                Tier(rhyme_density_at_least(0.6), 0.15, "Sparse rhyme", False),
            ),
            _criterion(ASPECT_SYLLABLES, Tier(avg_syllables_between(9, 11), 0.15, "~10 syllables per line")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_at_least(10), 0.05, "Substantial length")),
        ),
    ),
    FormSignature(
        form_type=FormType.COMMON_METER,
        name="Common Meter",
        category=FormCategory.METRICAL,
        description=(
            "Alternating lines of iambic tetrameter (8 syllables) and iambic trimeter "
            "(6 syllables) with ABAB or ABCB rhyme."
        ),
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanzas_all(4), 0.2, "Has 4-line stanzas")),
            _criterion(ASPECT_METER, Tier(meter_is(FootType.IAMB), 0.25, "Uses iambic meter")),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_alternate(8, 6, 1), 0.35, "Has strict 8-6-8-6 syllable pattern"),
            ),
            _criterion(ASPECT_RHYME, Tier(rhyme_matches(*_QUATRAIN_SCHEMES), 0.2, "Has common meter rhyme pattern")),
        ),
    ),
    FormSignature(
        form_type=FormType.BALLAD,
        name="Ballad",
        category=FormCategory.STANZAIC,
        description=(
            "A narrative poem with 4-line stanzas, alternating iambic tetrameter and "
            "trimeter, ABAB or ABCB rhyme."
        ),
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanzas_all(4), 0.25, "Has 4-line stanzas (quatrains)")),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_matches(*_QUATRAIN_SCHEMES, r"^(XAXA)+$"), 0.3, "Has ABAB/ABCB rhyme pattern"),
            ),
            _criterion(ASPECT_METER, Tier(meter_is(FootType.IAMB), 0.25, "Uses iambic meter")),
            _criterion(
                ASPECT_SYLLABLES,
                Tier(syllables_alternate(8, 6, 2), 0.2, "Has alternating 8-6 syllable pattern"),
            ),
        ),
    ),
    FormSignature(
        form_type=FormType.ODE,
        name="Ode",
        category=FormCategory.STANZAIC,
        description="A lyric poem with elaborate structure, typically praising or addressing a subject.",
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanza_count_at_least(3), 0.15, "Has {stanza_count} stanzas")),
            _criterion(
                ASPECT_STANZA,
                Tier(
                    avg_stanza_length_at_least(6),
                    0.15,
                    "Average {avg_stanza_length:.1f} lines per stanza",
                    False,
                ),
            ),
            _criterion(
                ASPECT_RHYME,
                Tier(rhyme_density_strictly_between(0.3, 0.8), 0.2, "Has moderate rhyme scheme complexity"),
            ),
            _criterion(ASPECT_METER, Tier(meter_is(FootType.IAMB), 0.15, "Uses iambic meter")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_at_least(20), 0.15, "Has substantial length")),
        ),
    ),
    FormSignature(
        form_type=FormType.TERCET,
        name="Tercet",
        category=FormCategory.STANZAIC,
        description="A poem composed of three-line stanzas.",
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanzas_all(3), 0.35, "Has 3-line stanzas")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_divisible(3, 3), 0.2, "Line count divisible by 3")),
            _criterion(ASPECT_RHYME, Tier(rhyme_length_at_least(3), 0.15, "Has rhyme scheme")),
            _any_meter(0.1),
        ),
    ),
    FormSignature(
        form_type=FormType.QUATRAIN,
        name="Quatrain",
        category=FormCategory.STANZAIC,
        description="A poem composed of four-line stanzas.",
        criteria=(
            _criterion(ASPECT_STANZA, Tier(stanzas_all(4), 0.35, "Has 4-line stanzas")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_divisible(4, 4), 0.2, "Line count divisible by 4")),
            _criterion(
                ASPECT_RHYME,
                Tier(
                    rhyme_matches(r"^(ABAB)+$", r"^(AABB)+$", r"^(ABBA)+$", r"^(ABCB)+$"),
                    0.25,
                    "Has quatrain rhyme pattern",
                ),
            ),
            _any_meter(0.1),
        ),
    ),
    FormSignature(
        form_type=FormType.COUPLET,
        name="Couplet",
        category=FormCategory.STANZAIC,
        description="A poem composed of rhyming pairs of lines.",
        criteria=(
            _criterion(ASPECT_RHYME, Tier(rhymes_in_pairs(2), 0.4, "Lines rhyme in pairs")),
            _criterion(ASPECT_LINE_COUNT, Tier(line_count_divisible(2, 2), 0.2, "Even number of lines")),
            _criterion(ASPECT_STANZA, Tier(stanzas_all(2), 0.2, "Has 2-line stanzas")),
            _any_meter(0.1),
        ),
    ),
    FormSignature(
        form_type=FormType.SONNET,
        name="Sonnet",
        category=FormCategory.FIXED_FORM,
        description="A 14-line poem, typically in iambic pentameter with a defined rhyme scheme.",
        criteria=(
            _criterion(
                ASPECT_LINE_COUNT,
                _fourteen_lines(0.4, "Has 14 lines (sonnet length)"),
                Tier(line_count_between(12, 16), 0.15, "Has {line_count} lines (near sonnet length)", False),
            ),
            _criterion(
                ASPECT_METER,
                _iambic_pentameter(0.3),
                Tier(meter_is(FootType.IAMB), 0.15, "Uses iambic meter"),
            ),
            _criterion(ASPECT_RHYME, Tier(rhyme_density_below(0.7, 10), 0.2, "Has structured rhyme scheme")),
        ),
    ),
    FormSignature(
        form_type=FormType.FREE_VERSE,
        name="Free Verse",
        category=FormCategory.FREE,
        description="Poetry without consistent meter, rhyme scheme, or stanza structure.",
        criteria=(
            _criterion(ASPECT_METER, Tier(regularity_below(0.5), 0.2, "Irregular meter")),
            _criterion(ASPECT_RHYME, Tier(rhyme_density_at_least(0.7), 0.2, "Minimal or no rhyme")),
            _criterion(ASPECT_SYLLABLES, Tier(syllable_spread_at_least(5), 0.15, "Variable line lengths")),
            _criterion(ASPECT_STANZA, Tier(stanza_sizes_vary(), 0.1, "Variable stanza structure")),
        ),
        base_confidence=0.2,
        strong_meter_threshold=0.7,
        strong_meter_damping=0.7,
    ),
)

SONNET_FORMS = frozenset(
    {
        FormType.SHAKESPEAREAN_SONNET,
        FormType.PETRARCHAN_SONNET,
        FormType.SPENSERIAN_SONNET,
        FormType.SONNET,
    }
)


__all__ = [
    "ASPECT_LINE_COUNT",
    "ASPECT_METER",
    "ASPECT_RHYME",
    "ASPECT_STANZA",
    "ASPECT_SYLLABLES",
    "Criterion",
    "FORM_CATALOG",
    "FormCategory",
    "FormSignature",
    "FormType",
    "SONNET_FORMS",
    "Tier",
]
