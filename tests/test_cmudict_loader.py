import pytest

from poem_prosody.core.cmudict_loader import (
    CMUDictLoader,
    base_phoneme,
    ensure_dictionary_loaded,
    extract_stress_from_phonemes,
    get_phoneme_stress,
    get_rhyming_part,
    is_vowel,
)
from poem_prosody.errors import DictionaryLoadError


def test_loader_reads_entries_and_strips_variant_markers(mini_loader):
    assert mini_loader.get_pronunciations("record") == [
        ["R", "EH1", "K", "ER0", "D"],
        ["R", "IH0", "K", "AO1", "R", "D"],
    ]
    assert mini_loader.has_word("RECORD")
    assert not mini_loader.has_word("record(1)")


def test_loader_lookups_are_case_insensitive(mini_loader):
    assert mini_loader.get_pronunciations("  Cat ") == [["K", "AE1", "T"]]
    assert mini_loader.get_pronunciations("unknownword") == []


def test_stress_pattern_uses_primary_pronunciation(mini_loader):
    assert mini_loader.stress_pattern_for("record") == "10"
    assert mini_loader.stress_pattern_for("hello") == "01"
    assert mini_loader.stress_pattern_for("zorblax") is None


def test_syllable_count_counts_vowels(mini_loader):
    assert mini_loader.get_syllable_count("hello") == 2
    assert mini_loader.get_syllable_count("cat") == 1
    assert mini_loader.get_syllable_count("zorblax") is None


def test_rhyme_parts_drop_stress_digits(mini_loader):
    assert mini_loader.get_rhyme_parts("cat") == {"AE T"}
    assert mini_loader.get_rhyme_parts("record") == {"EH K ER D", "AO R D"}


def test_loader_retries_after_file_creation(tmp_path):
    dict_path = tmp_path / "cmudict.dict"
    loader = CMUDictLoader(dict_path=dict_path)

    # A missing file leaves the loader unloaded so later calls can retry.
    assert loader.get_pronunciations("test") == []
    assert loader.loaded is False

    dict_path.write_text("TEST  T EH1 S T\n", encoding="utf-8")

    assert loader.get_pronunciations("test") == [["T", "EH1", "S", "T"]]
    assert loader.loaded is True


def test_strict_load_raises_for_missing_dictionary(tmp_path):
    missing = tmp_path / "absent.dict"
    loader = CMUDictLoader(dict_path=missing)

    with pytest.raises(DictionaryLoadError) as excinfo:
        loader.load(strict=True)

    assert excinfo.value.path == missing


def test_strict_load_raises_for_dictionary_without_entries(tmp_path):
    empty = tmp_path / "comments.dict"
    empty.write_text(";;; nothing but comments\n\n", encoding="utf-8")

    with pytest.raises(DictionaryLoadError):
        CMUDictLoader(dict_path=empty).load(strict=True)


def test_dictionary_path_can_come_from_environment(monkeypatch, dictionary_path):
    monkeypatch.setenv("POEM_PROSODY_CMUDICT_PATH", str(dictionary_path))

    loader = CMUDictLoader()

    assert loader.dict_path == dictionary_path
    assert loader.stress_pattern_for("today") == "01"


def test_phoneme_helpers():
    assert base_phoneme("AE1") == "AE"
    assert is_vowel("OW0")
    assert not is_vowel("HH")
    assert get_phoneme_stress("EY2") == "2"
    assert get_phoneme_stress("T") is None
    assert extract_stress_from_phonemes(["HH", "AH0", "L", "OW1"]) == "01"


def test_rhyming_part_prefers_primary_then_secondary_stress():
    assert get_rhyming_part(["K", "AE1", "T"]) == ["AE1", "T"]
    assert get_rhyming_part(["R", "EH1", "K", "ER0", "D"]) == ["EH1", "K", "ER0", "D"]
    assert get_rhyming_part(["B", "AE2", "T", "AH0"]) == ["AE2", "T", "AH0"]
    assert get_rhyming_part(["DH", "AH0"]) == ["AH0"]
    assert get_rhyming_part(["S", "T"]) == []


def test_bundled_dictionary_from_pronouncing(monkeypatch):
    monkeypatch.delenv("POEM_PROSODY_CMUDICT_PATH", raising=False)
    loader = CMUDictLoader()

    assert loader.load(strict=True)
    assert loader.stress_pattern_for("hello") == "01"
    assert loader.get_syllable_count("beautiful") == 3
    assert "EY" in loader.get_rhyme_parts("day")


def test_ensure_dictionary_loaded_warms_the_given_loader(mini_loader):
    assert not mini_loader.loaded
    assert ensure_dictionary_loaded(mini_loader)
    assert mini_loader.loaded
