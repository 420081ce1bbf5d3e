import pytest

from poem_prosody.core.feet import FootType, LineLength
from poem_prosody.core.meter import (
    analyze_multi_line_meter,
    calculate_regularity,
    classify_line_length,
    create_meter_pattern,
    detect_meter,
    find_best_meter_match,
    find_deviations,
    foot_type_to_adjective,
    get_feet_from_line_length,
    levenshtein_distance,
    parse_meter_name,
    string_similarity,
)


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "0101") == 4
    assert levenshtein_distance("0101", "0101") == 0


def test_string_similarity_bounds():
    assert string_similarity("", "") == 1.0
    assert string_similarity("01", "") == 0.0
    assert string_similarity("0101", "0111") == 0.75


@pytest.mark.parametrize(
    "syllables, foot, expected",
    [
        (10, FootType.IAMB, LineLength.PENTAMETER),
        (8, FootType.TROCHEE, LineLength.TETRAMETER),
        (9, FootType.ANAPEST, LineLength.TRIMETER),
        (5, FootType.IAMB, LineLength.TRIMETER),
        (0, FootType.IAMB, LineLength.MONOMETER),
        (40, FootType.IAMB, LineLength.OCTAMETER),
    ],
)
def test_classify_line_length(syllables, foot, expected):
    assert classify_line_length(syllables, foot) == expected


def test_feet_from_line_length_defaults_to_four():
    assert get_feet_from_line_length(LineLength.PENTAMETER) == 5
    assert get_feet_from_line_length("dimeter") == 2
    assert get_feet_from_line_length("unheard-of") == 4


def test_regularity_and_deviations():
    assert calculate_regularity("0101010101", FootType.IAMB) == 1.0
    assert calculate_regularity("0111", FootType.IAMB) == 0.75
    assert calculate_regularity("", FootType.IAMB) == 0.0
    assert find_deviations("0111", FootType.IAMB) == (2,)


def test_meter_pattern_helpers():
    assert create_meter_pattern(FootType.DACTYL, 2) == "100100"
    assert create_meter_pattern(FootType.UNKNOWN, 2) == "0101"
    assert foot_type_to_adjective("anapest") == "anapestic"


def test_best_match_orders_by_score():
    matches = find_best_meter_match("0101010101")

    assert matches[0].meter == "iambic pentameter"
    assert matches[0].score == 1.0
    assert len(matches) == 40
    assert all(a.score >= b.score for a, b in zip(matches, matches[1:]))
    assert find_best_meter_match("") == []


@pytest.mark.parametrize(
    "pattern, meter_name, foot, feet",
    [
        ("0101010101", "iambic pentameter", FootType.IAMB, 5),
        ("10101010", "trochaic tetrameter", FootType.TROCHEE, 4),
        ("001001001001", "anapestic tetrameter", FootType.ANAPEST, 4),
        ("100100", "dactylic dimeter", FootType.DACTYL, 2),
    ],
)
def test_detect_meter_exact_patterns(pattern, meter_name, foot, feet):
    result = detect_meter(pattern)

    assert result.meter_name == meter_name
    assert result.foot_type == foot
    assert result.feet_per_line == feet
    assert result.regularity == 1.0
    assert result.confidence == 1.0


def test_detect_meter_folds_secondary_stress():
    result = detect_meter("0201020102")

    assert result.pattern == "0101010101"
    assert result.meter_name == "iambic pentameter"


def test_detect_meter_damps_short_patterns():
    result = detect_meter("01")

    assert result.meter_name == "iambic monometer"
    assert result.confidence == pytest.approx(0.7)


def test_detect_meter_tolerates_a_dropped_syllable():
    result = detect_meter("010101010")

    assert result.foot_type == FootType.IAMB
    assert result.line_length in (LineLength.TETRAMETER, LineLength.PENTAMETER)
    assert 0.0 < result.confidence < 1.0


def test_detect_meter_of_empty_pattern_is_irregular():
    result = detect_meter("")

    assert result.meter_name == "irregular"
    assert result.foot_type == FootType.UNKNOWN
    assert result.feet_per_line == 0
    assert result.confidence == 0.0


def test_detect_meter_is_deterministic():
    assert detect_meter("0101010101").as_dict() == detect_meter("0101010101").as_dict()


def test_multi_line_meter_blends_consistency():
    result = analyze_multi_line_meter(["0101010101"] * 3 + ["1010"])

    assert result.meter_name == "iambic pentameter"
    assert result.confidence == pytest.approx(0.75)
    assert result.regularity == pytest.approx(0.875)


def test_multi_line_meter_of_no_lines():
    assert analyze_multi_line_meter([]).meter_name == "irregular"


def test_parse_meter_name():
    assert parse_meter_name("Iambic Pentameter") == (FootType.IAMB, LineLength.PENTAMETER)
    assert parse_meter_name("dactylic") == (FootType.DACTYL, LineLength.TETRAMETER)
    assert parse_meter_name("irregular") == (FootType.UNKNOWN, LineLength.TETRAMETER)
    assert parse_meter_name("limerick") is None
