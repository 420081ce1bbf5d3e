import json
import string

import pytest

from poem_prosody.core.rhyme import (
    RhymeAnalysis,
    RhymeType,
    analyze_rhymes,
    calculate_phonetic_similarity,
    classify_rhyme,
    detect_rhyme_scheme,
    detect_stanza_rhyme_schemes,
    find_internal_rhymes,
    get_last_word,
    identify_rhyme_form,
    rhyme_label,
    tokenize_line,
    words_rhyme,
)


def test_last_word_strips_punctuation_and_case():
    assert get_last_word("Shall I compare thee to a summer's Day?") == "day"
    assert get_last_word("Gone -- ") == "gone"
    assert get_last_word("   ") == ""


def test_phonetic_similarity():
    assert calculate_phonetic_similarity(["AE1", "T"], ["AE1", "T"]) == 1.0
    assert calculate_phonetic_similarity(["AE1", "T"], ["AO1", "G"]) == pytest.approx(0.3)
    assert calculate_phonetic_similarity([], ["AE1"]) == 0.0


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("cat", "hat", RhymeType.PERFECT),
        ("night", "light", RhymeType.PERFECT),
        ("time", "mine", RhymeType.ASSONANCE),
        ("bat", "bit", RhymeType.CONSONANCE),
        ("cat", "dog", RhymeType.NONE),
    ],
)
def test_classify_rhyme(mini_loader, first, second, expected):
    assert classify_rhyme(first, second, mini_loader) == expected


def test_classify_rhyme_uses_best_pronunciation(mini_loader):
    # Only the second pronunciation of "record" ends in AO1 R D.
    assert classify_rhyme("record", "lord", mini_loader) == RhymeType.PERFECT
    assert classify_rhyme("record", "cat", mini_loader) == RhymeType.NONE
    assert classify_rhyme("", "cat", mini_loader) == RhymeType.NONE


def test_unknown_words_compare_spelling(mini_loader):
    assert classify_rhyme("zat", "blat", mini_loader) == RhymeType.PERFECT
    assert classify_rhyme("zat", "zog", mini_loader) == RhymeType.NONE


def test_strict_mode_only_accepts_perfect_rhymes(mini_loader):
    assert words_rhyme("time", "mine", mini_loader)
    assert not words_rhyme("time", "mine", mini_loader, strict=True)
    assert words_rhyme("cat", "hat", mini_loader, strict=True)


def test_rhyme_scheme_labels_in_first_seen_order(mini_loader):
    lines = ["I saw a cat", "beside a dog", "who wore a hat", "out in the fog"]

    assert detect_rhyme_scheme(lines, mini_loader) == "ABAB"


def test_rhyme_scheme_couplets_and_blank_lines(mini_loader):
    lines = ["the cat", "the hat", "...", "the dog", "the log"]

    assert detect_rhyme_scheme(lines, mini_loader) == "AABCC"
    assert detect_rhyme_scheme([], mini_loader) == ""


def test_strict_scheme_splits_near_rhymes(mini_loader):
    lines = ["it is time", "it is mine"]

    assert detect_rhyme_scheme(lines, mini_loader) == "AA"
    assert detect_rhyme_scheme(lines, mini_loader, strict=True) == "AB"


def test_stanza_schemes_restart_labels(mini_loader):
    stanzas = [["the cat", "the hat"], ["the dog", "the fog"]]

    assert detect_stanza_rhyme_schemes(stanzas, mini_loader) == ["AA", "AA"]


def test_perfect_rhyme_found_through_rhyme_parts(mini_loader, monkeypatch):
    looked_up = []
    rhyme_parts = mini_loader.get_rhyme_parts

    def recording(word):
        looked_up.append(word)
        return rhyme_parts(word)

    monkeypatch.setattr(mini_loader, "get_rhyme_parts", recording)

    assert classify_rhyme("Record", "lord", mini_loader) == RhymeType.PERFECT
    assert looked_up == ["record", "lord"]


def test_labels_continue_past_z():
    assert rhyme_label(0) == "A"
    assert rhyme_label(25) == "Z"
    assert rhyme_label(26) == "a"
    assert rhyme_label(51) == "z"
    assert rhyme_label(52) == "Ā"
    assert len({rhyme_label(index) for index in range(200)}) == 200


def test_long_unrhymed_poem_keeps_every_group_distinct(mini_loader):
    words = [f"z{vowel}{consonant}" for vowel in "aeiou" for consonant in "bdgkmnpt"]
    lines = [f"the {word}" for word in words]

    scheme = detect_rhyme_scheme(lines, mini_loader)

    assert len(scheme) == 40
    assert len(set(scheme)) == 40
    assert scheme[:26] == string.ascii_uppercase
    assert scheme[26:] == string.ascii_lowercase[:14]


def test_tokenize_line_keeps_offsets():
    assert tokenize_line("'Tis the cat's hat") == [("tis", 0), ("the", 5), ("cat's", 9), ("hat", 15)]
    assert tokenize_line("  ") == []


def test_internal_rhymes_within_a_line(mini_loader):
    rhymes = find_internal_rhymes("cat and hat and dog", 4, mini_loader)

    assert len(rhymes) == 1
    assert rhymes[0].words == ("cat", "hat")
    assert rhymes[0].positions == (0, 8)
    assert rhymes[0].line == 4
    assert rhymes[0].rhyme_type == RhymeType.PERFECT


def test_final_word_only_pairs_with_the_first(mini_loader):
    rhymes = find_internal_rhymes("night falls on the light", 0, mini_loader)

    assert [rhyme.words for rhyme in rhymes] == [("night", "light")]
    assert rhymes[0].positions == (0, 19)

    # "hat" ends the line, so it is not paired with "cat" in the middle.
    assert find_internal_rhymes("in the cat hat", 0, mini_loader) == []
    assert find_internal_rhymes("cat", 0, mini_loader) == []


def test_analyze_rhymes_groups_end_words(mini_loader):
    lines = ["I saw a cat", "beside a dog", "who wore a hat", "out in the fog"]

    analysis = analyze_rhymes(lines, mini_loader)

    assert analysis.scheme == "ABAB"
    assert analysis.rhyme_form == "alternate"
    assert [group.label for group in analysis.groups] == ["A", "B"]
    assert analysis.groups[0].lines == (0, 2)
    assert analysis.groups[0].end_words == ("cat", "hat")
    assert analysis.groups[1].rhyme_type == RhymeType.PERFECT
    assert analysis.internal_rhymes == ()


def test_single_line_groups_have_no_rhyme_type(mini_loader):
    analysis = analyze_rhymes(["the cat", "the dog"], mini_loader)

    assert [group.rhyme_type for group in analysis.groups] == [RhymeType.NONE, RhymeType.NONE]
    assert analysis.rhyme_form == "free verse (minimal rhyme)"
    assert analyze_rhymes([], mini_loader) == RhymeAnalysis.empty()


def test_rhyme_analysis_as_dict_is_serialisable(mini_loader):
    data = json.loads(json.dumps(analyze_rhymes(["cat and hat", "the dog"], mini_loader).as_dict()))

    assert data["scheme"] == "AB"
    assert data["groups"][0]["rhyme_type"] == "none"
    assert data["internal_rhymes"][0]["words"] == ["cat", "hat"]


@pytest.mark.parametrize(
    "scheme, expected",
    [
        ("", "none"),
        ("ABABCDCDEFEFGG", "Shakespearean sonnet"),
        ("ABBA", "enclosed"),
        ("AABBA", "limerick"),
        ("AABBCCDDEE", "couplets"),
        ("ABCDABCD", "repeating pattern"),
        ("ABABCBCDC", "terza rima"),
        ("ABCDEFGHIJ", "free verse (minimal rhyme)"),
        ("ABCDEFGHAB", "loose rhyme"),
        ("ABCABD", "moderate rhyme"),
        ("ABAA", "dense rhyme"),
    ],
)
def test_identify_rhyme_form(scheme, expected):
    assert identify_rhyme_form(scheme) == expected
