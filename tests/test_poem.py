import io
import json

import pytest

from poem_prosody.__main__ import main
from poem_prosody.core.feet import FootType
from poem_prosody.core.form_catalog import FormType
from poem_prosody.core.poem import analyze_poem

COUPLETS = "hello the cat\nhello the hat\n\nhello the dog\nhello the fog\n"


def test_analyze_poem_runs_every_stage(mini_loader):
    analysis = analyze_poem(COUPLETS, mini_loader)

    assert analysis.line_count == 4
    assert analysis.stanza_count == 2
    assert [line.pattern for line in analysis.line_stress] == ["0101"] * 4
    assert analysis.syllables_per_line == (4, 4, 4, 4)
    assert analysis.dominant_foot == FootType.IAMB
    assert analysis.meter.meter_name == "iambic dimeter"
    assert analysis.rhyme_scheme == "AABB"
    assert analysis.stanza_rhyme_schemes == ("AA", "AA")
    assert analysis.form.form_type == FormType.COUPLET
    assert analysis.emotion.dominant_emotions


def test_analyze_poem_reports_rhyme_sound_and_structure(mini_loader):
    analysis = analyze_poem(COUPLETS, mini_loader)

    assert analysis.rhyme.scheme == "AABB"
    assert analysis.rhyme.rhyme_form == "couplets"
    assert [group.end_words for group in analysis.rhyme.groups] == [
        ("cat", "hat"),
        ("dog", "fog"),
    ]

    summary = analysis.sound_patterns.summary
    assert summary.alliteration_count == 1
    assert summary.assonance_count == 4
    assert summary.consonance_count == 1
    assert summary.top_assonance_sounds == ("AH",)
    assert summary.density == pytest.approx(0.3)

    assert analysis.structure.structure_pattern == "AB"
    assert not analysis.structure.has_verse_chorus_structure
    assert analysis.structure.refrains == ()


def test_analyze_poem_of_empty_text(mini_loader):
    analysis = analyze_poem("", mini_loader)

    assert analysis.line_count == 0
    assert analysis.stanzas == ()
    assert analysis.meter.meter_name == "irregular"
    assert analysis.rhyme_scheme == ""
    assert analysis.form.form_type == FormType.UNKNOWN
    assert analysis.form.confidence == 0.0
    assert analysis.rhyme.scheme == ""
    assert analysis.sound_patterns.lines == ()
    assert analysis.structure.summary == "No stanzas to analyze"


def test_analysis_as_dict_round_trips_through_json(mini_loader):
    data = json.loads(json.dumps(analyze_poem(COUPLETS, mini_loader).as_dict()))

    assert data["line_count"] == 4
    assert data["dominant_foot"] == "iamb"
    assert data["form"]["form_type"] == "couplet"
    assert data["meter"]["feet_per_line"] == 2
    assert data["rhyme"]["rhyme_form"] == "couplets"
    assert data["sound_patterns"]["summary"]["assonance_count"] == 4
    assert data["structure"]["structure_pattern"] == "AB"


def test_cli_reads_file_and_prints_json(tmp_path, dictionary_path, capsys):
    poem_path = tmp_path / "poem.txt"
    poem_path.write_text(COUPLETS, encoding="utf-8")

    exit_code = main([str(poem_path), "--cmudict", str(dictionary_path), "--compact"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["rhyme_scheme"] == "AABB"


def test_cli_reads_standard_input(monkeypatch, dictionary_path, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(COUPLETS))

    exit_code = main(["--cmudict", str(dictionary_path)])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["stanza_count"] == 2


def test_cli_fails_when_dictionary_is_missing(tmp_path, capsys):
    poem_path = tmp_path / "poem.txt"
    poem_path.write_text(COUPLETS, encoding="utf-8")

    exit_code = main([str(poem_path), "--cmudict", str(tmp_path / "missing.dict")])

    assert exit_code == 2
    assert capsys.readouterr().out == ""
