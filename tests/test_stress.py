from poem_prosody.core.feet import FootType
from poem_prosody.core.stress import (
    StressAnalysis,
    analyze_line_stress,
    analyze_poem_stress,
    calculate_confidence,
    classify_foot,
    count_feet,
    detect_deviations,
    get_dominant_foot,
    get_line_stress_pattern,
    get_meter_name,
    get_word_stress_pattern,
    is_regular_pattern,
)


def _analysis(foot_type):
    return StressAnalysis(pattern="01", syllable_stresses=("0", "1"), foot_type=foot_type, deviations=())


def test_word_stress_prefers_dictionary(mini_loader):
    assert get_word_stress_pattern("hello", mini_loader) == "01"
    assert get_word_stress_pattern("record", mini_loader) == "10"


def test_word_stress_falls_back_to_estimate(mini_loader):
    assert get_word_stress_pattern("zorblax", mini_loader) == "10"
    assert get_word_stress_pattern("", mini_loader) == ""


def test_line_stress_concatenates_words(mini_loader):
    assert get_line_stress_pattern(["the", "sun", "is", "bright"], mini_loader) == "0111"
    assert get_line_stress_pattern([], mini_loader) == ""


def test_two_syllable_patterns_use_lookup():
    assert classify_foot("01") == FootType.IAMB
    assert classify_foot("10") == FootType.TROCHEE
    assert classify_foot("11") == FootType.SPONDEE
    assert classify_foot("00") == FootType.UNKNOWN


def test_short_patterns_are_unknown():
    assert classify_foot("") == FootType.UNKNOWN
    assert classify_foot("1") == FootType.UNKNOWN


def test_longer_patterns_match_cyclic_feet():
    assert classify_foot("0101010101") == FootType.IAMB
    assert classify_foot("10101010") == FootType.TROCHEE
    assert classify_foot("001001001") == FootType.ANAPEST
    assert classify_foot("100100100") == FootType.DACTYL


def test_secondary_stress_counts_as_stressed():
    assert classify_foot("0201020102") == FootType.IAMB


def test_below_threshold_is_unknown():
    # Best cyclic match is only 4/6 positions.
    assert classify_foot("110011") == FootType.UNKNOWN


def test_detect_deviations_reports_mismatched_positions():
    assert detect_deviations("0111", FootType.IAMB) == (2,)
    assert detect_deviations("0101", "iamb") == ()
    assert detect_deviations("0101", FootType.UNKNOWN) == ()


def test_analyze_line_stress(mini_loader):
    analysis = analyze_line_stress(["hello", "the", "cat"], mini_loader)

    assert analysis.pattern == "0101"
    assert analysis.syllable_stresses == ("0", "1", "0", "1")
    assert analysis.foot_type == FootType.IAMB
    assert analysis.deviations == ()
    assert analysis.as_dict()["foot_type"] == "iamb"


def test_analyze_line_stress_of_empty_line_is_empty():
    assert analyze_line_stress([]) == StressAnalysis.empty()


def test_analyze_poem_stress_keeps_line_order(mini_loader):
    analyses = analyze_poem_stress([["hello"], ["record"]], mini_loader)

    assert [analysis.foot_type for analysis in analyses] == [FootType.IAMB, FootType.TROCHEE]


def test_dominant_foot_requires_forty_percent_share():
    analyses = [_analysis(FootType.IAMB), _analysis(FootType.IAMB)] + [
        _analysis(FootType.UNKNOWN) for _ in range(3)
    ]
    assert get_dominant_foot(analyses) == FootType.IAMB

    analyses.append(_analysis(FootType.UNKNOWN))
    assert get_dominant_foot(analyses) == FootType.UNKNOWN


def test_dominant_foot_ties_go_to_first_seen():
    analyses = [_analysis(FootType.TROCHEE), _analysis(FootType.IAMB)]
    assert get_dominant_foot(analyses) == FootType.TROCHEE
    assert get_dominant_foot([]) == FootType.UNKNOWN


def test_meter_names():
    assert get_meter_name(FootType.IAMB, 5) == "iambic_pentameter"
    assert get_meter_name("dactyl", 2) == "dactylic_dimeter"
    assert get_meter_name(FootType.IAMB, 9) == "iambic_9-foot"
    assert get_meter_name(FootType.UNKNOWN, 5) == "irregular"


def test_pattern_utilities():
    assert count_feet("0101010101", FootType.IAMB) == 5
    assert count_feet("0010010", FootType.ANAPEST) == 3
    assert calculate_confidence("0111", FootType.IAMB) == 0.75
    assert calculate_confidence("0101", FootType.UNKNOWN) == 0.0
    assert is_regular_pattern("0101010101")
    assert is_regular_pattern("1")
    assert not is_regular_pattern("110011")
