import json

import pytest

from poem_prosody.core.structure import (
    Refrain,
    Section,
    SectionType,
    StanzaSimilarity,
    analyze_structure,
    calculate_line_similarity,
    calculate_meter_similarity,
    calculate_stanza_text_similarity,
    classify_sections,
    detect_refrains,
    generate_structure_pattern,
    normalize_text_for_comparison,
)

CHORUS = ["hello the cat", "hello the hat"]
VERSE = ["the dog is away", "the fog is today"]


def _similarity(first, second, overall):
    return StanzaSimilarity(
        first=first,
        second=second,
        overall=overall,
        text=overall,
        meter=overall,
        line_count_match=True,
        foot_type_match=False,
    )


def test_normalisation_drops_case_and_punctuation():
    assert normalize_text_for_comparison("  Hello,  the CAT! ") == "hello the cat"
    assert normalize_text_for_comparison("") == ""


def test_line_similarity():
    assert calculate_line_similarity("Hello, the cat!", "hello the cat") == 1.0
    assert calculate_line_similarity("", "") == 0.0
    assert calculate_line_similarity("hello the cat", "hello the hat") == pytest.approx(
        0.6 * 12 / 13 + 0.4 * 0.5
    )


def test_stanza_text_similarity_penalises_length_mismatch():
    assert calculate_stanza_text_similarity(CHORUS, CHORUS) == pytest.approx(1.0)
    assert calculate_stanza_text_similarity(CHORUS, CHORUS[:1]) == pytest.approx(0.7 + 0.3 * 0.5)
    assert calculate_stanza_text_similarity([], CHORUS) == 0.0


def test_meter_similarity_of_identical_stanzas(mini_loader):
    assert calculate_meter_similarity(CHORUS, CHORUS, mini_loader) == pytest.approx(1.0)
    assert calculate_meter_similarity([], CHORUS, mini_loader) == 0.0


def test_refrains_span_stanzas():
    refrains = detect_refrains([["Hello, the cat!", "a lonely line"], ["hello the cat"]])

    assert len(refrains) == 1
    assert refrains[0].text == "Hello, the cat!"
    assert refrains[0].normalized_text == "hello the cat"
    assert refrains[0].occurrences == ((0, 0), (1, 0))


def test_repeats_inside_one_stanza_and_short_lines_are_not_refrains():
    assert detect_refrains([["la la la", "la la la"], ["something else"]]) == []
    assert detect_refrains([["oh"], ["oh"]]) == []
    assert detect_refrains(None) == []


def test_similar_stanzas_become_one_chorus(mini_loader):
    analysis = analyze_structure([CHORUS, VERSE, CHORUS], mini_loader)

    chorus, verse = analysis.sections
    assert chorus.section_type == SectionType.CHORUS
    assert chorus.stanza_indices == (0, 2)
    assert chorus.confidence == pytest.approx(1.0)
    assert verse.label == "Verse 1"
    assert analysis.structure_pattern == "ABA"
    assert analysis.has_verse_chorus_structure
    assert [refrain.normalized_text for refrain in analysis.refrains] == list(CHORUS)
    assert analysis.summary == "Verse/chorus structure detected, 1 verse, 1 chorus section, 2 refrain lines"
    assert analysis.section_for_stanza(2) == chorus
    assert len(analysis.similarities) == 3


def test_bridge_is_an_outlier_in_the_middle():
    stanzas = [["one"], ["two"], ["three"], ["four"]]
    similarities = [
        _similarity(0, 1, 0.7),
        _similarity(0, 2, 0.1),
        _similarity(0, 3, 0.7),
        _similarity(1, 2, 0.1),
        _similarity(1, 3, 0.7),
        _similarity(2, 3, 0.1),
    ]

    sections = classify_sections(stanzas, similarities, [])

    assert [section.label for section in sections] == ["Verse 1", "Verse 2", "Bridge", "Verse 3"]
    assert sections[2].confidence == pytest.approx(0.9)
    assert sections[0].confidence == pytest.approx(0.7)
    assert generate_structure_pattern(sections, len(stanzas)) == "ABCD"


def test_refrain_heavy_stanza_is_a_chorus():
    stanzas = [["a", "b"], ["c", "d"], ["e", "f"]]
    similarities = [_similarity(0, 1, 0.5), _similarity(0, 2, 0.5), _similarity(1, 2, 0.5)]
    refrains = [Refrain(text="c", normalized_text="c", occurrences=((1, 0), (1, 1)))]

    sections = classify_sections(stanzas, similarities, refrains)

    assert [section.section_type for section in sections] == [
        SectionType.VERSE,
        SectionType.CHORUS,
        SectionType.VERSE,
    ]
    assert sections[1].confidence == 1.0
    assert sections[2].label == "Verse 2"


def test_choruses_share_one_letter():
    sections = [
        Section(SectionType.CHORUS, (0, 2), "Chorus", 0.9),
        Section(SectionType.VERSE, (1,), "Verse 1", 0.5),
        Section(SectionType.VERSE, (3,), "Verse 2", 0.5),
    ]

    assert generate_structure_pattern(sections, 4) == "ABAC"
    assert generate_structure_pattern([], 2) == "??"


def test_single_and_empty_poems(mini_loader):
    single = analyze_structure([CHORUS], mini_loader)
    assert single.structure_pattern == "A"
    assert single.summary == "Single stanza poem"
    assert single.sections[0].label == "Verse 1"

    empty = analyze_structure([], mini_loader)
    assert empty.sections == ()
    assert empty.summary == "No stanzas to analyze"


def test_structure_as_dict_is_serialisable(mini_loader):
    data = json.loads(json.dumps(analyze_structure([CHORUS, VERSE, CHORUS], mini_loader).as_dict()))

    assert data["structure_pattern"] == "ABA"
    assert data["sections"][0]["type"] == "chorus"
    assert data["refrains"][0]["occurrences"] == [[0, 0], [2, 0]]
