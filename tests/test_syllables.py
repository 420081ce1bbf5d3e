from poem_prosody.utils.syllables import (
    estimate_stress_for_unknown_word,
    estimate_syllable_count,
)


def test_blank_words_have_no_syllables():
    assert estimate_syllable_count("") == 0
    assert estimate_syllable_count("   ") == 0


def test_vowel_groups_are_counted_once():
    assert estimate_syllable_count("cat") == 1
    assert estimate_syllable_count("boat") == 1
    assert estimate_syllable_count("rhythm") == 1


def test_silent_e_and_le_endings():
    assert estimate_syllable_count("stone") == 1
    assert estimate_syllable_count("table") == 2


def test_ed_suffix_only_counts_after_t_or_d():
    assert estimate_syllable_count("jumped") == 1
    assert estimate_syllable_count("wanted") == 2


def test_every_nonblank_word_has_at_least_one_syllable():
    assert estimate_syllable_count("hmm") == 1


def test_unknown_word_stress_follows_syllable_count():
    assert estimate_stress_for_unknown_word("") == ""
    assert estimate_stress_for_unknown_word("zap") == "1"
    assert estimate_stress_for_unknown_word("zorblax") == "10"
    assert estimate_stress_for_unknown_word("banana") == "100"
