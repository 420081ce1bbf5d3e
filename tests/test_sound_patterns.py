import json

import pytest

from poem_prosody.core.sound_patterns import (
    SoundPatternAnalysis,
    SoundPatternType,
    analyze_line_sound_patterns,
    analyze_sound_patterns,
    calculate_pattern_strength,
    describe_sound_pattern,
    detect_alliteration,
    detect_assonance,
    detect_consonance,
)


def test_pattern_strength_rewards_count_and_closeness():
    assert calculate_pattern_strength([0, 4, 8], 14) == pytest.approx(0.5 * (1 - 8 / 14 * 0.5))
    assert calculate_pattern_strength([0, 4], 7) == pytest.approx(0.3 * (1 - 4 / 7 * 0.5))
    assert calculate_pattern_strength([3], 10) == 0.0
    assert calculate_pattern_strength([0, 2], 0) == 0.0


def test_alliteration_on_shared_initial_consonant(mini_loader):
    patterns = detect_alliteration("bat bit bright", 2, mini_loader)

    assert len(patterns) == 1
    pattern = patterns[0]
    assert pattern.pattern_type == SoundPatternType.ALLITERATION
    assert pattern.sound == "B"
    assert pattern.words == ("bat", "bit", "bright")
    assert pattern.positions == (0, 4, 8)
    assert pattern.line_number == 2
    assert pattern.strength == pytest.approx(5 / 14)


def test_two_words_are_enough_for_alliteration(mini_loader):
    patterns = detect_alliteration("dog day", cmu_loader=mini_loader)

    assert [pattern.sound for pattern in patterns] == ["D"]
    assert patterns[0].strength == pytest.approx(0.3 * 5 / 7)


def test_assonance_on_shared_vowel(mini_loader):
    patterns = detect_assonance("light bright night", cmu_loader=mini_loader)

    assert [pattern.sound for pattern in patterns] == ["AY"]
    assert patterns[0].words == ("light", "bright", "night")
    assert patterns[0].strength == pytest.approx(23 / 72)
    assert detect_assonance("bat bit bright", cmu_loader=mini_loader) == []


def test_common_consonants_need_three_words_and_are_damped(mini_loader):
    patterns = detect_consonance("bat bit bright", cmu_loader=mini_loader)

    assert [pattern.sound for pattern in patterns] == ["B", "T"]
    assert patterns[0].strength == pytest.approx(5 / 14)
    assert patterns[1].strength == pytest.approx(5 / 14 * 0.7)

    # D is common, so two words sharing it are not consonance.
    assert detect_consonance("dog day", cmu_loader=mini_loader) == []


def test_unknown_words_and_short_lines_have_no_patterns(mini_loader):
    assert detect_alliteration("zip zap zoom", cmu_loader=mini_loader) == []
    assert detect_assonance("night", cmu_loader=mini_loader) == []
    assert detect_consonance("", cmu_loader=mini_loader) == []


def test_quote_marks_do_not_hide_words(mini_loader):
    patterns = detect_alliteration("'bat' bit", cmu_loader=mini_loader)

    assert patterns[0].words == ("bat", "bit")
    assert patterns[0].positions == (0, 6)


def test_line_patterns_and_strongest(mini_loader):
    line = analyze_line_sound_patterns("bat bit bright", 0, mini_loader)

    assert len(line.all_patterns) == 3
    assert line.strongest_pattern().pattern_type == SoundPatternType.ALLITERATION
    assert analyze_line_sound_patterns("zip", 1, mini_loader).strongest_pattern() is None


def test_poem_summary_counts_and_top_sounds(mini_loader):
    analysis = analyze_sound_patterns(["bat bit bright", "light bright night"], mini_loader)

    summary = analysis.summary
    assert [line.line_number for line in analysis.lines] == [0, 1]
    assert summary.alliteration_count == 1
    assert summary.assonance_count == 1
    assert summary.consonance_count == 3
    assert summary.density == pytest.approx(0.5)
    assert summary.top_alliterative_sounds == ("B",)
    assert summary.top_assonance_sounds == ("AY",)


def test_empty_poem_has_empty_analysis(mini_loader):
    assert analyze_sound_patterns([], mini_loader) == SoundPatternAnalysis.empty()
    assert analyze_sound_patterns(None, mini_loader).summary.density == 0.0


def test_descriptions_name_the_sound(mini_loader):
    alliteration = detect_alliteration("bat bit bright", cmu_loader=mini_loader)[0]
    assonance = detect_assonance("light bright night", cmu_loader=mini_loader)[0]

    assert describe_sound_pattern(alliteration) == 'Alliteration on "b" sound: bat, bit, bright'
    assert describe_sound_pattern(assonance) == 'Assonance with "i" vowel: light, bright, night'


def test_analysis_as_dict_is_serialisable(mini_loader):
    data = json.loads(json.dumps(analyze_sound_patterns(["bat bit bright"], mini_loader).as_dict()))

    assert data["summary"]["alliteration_count"] == 1
    assert data["lines"][0]["alliterations"][0]["type"] == "alliteration"
