from poem_prosody.core.preprocess import (
    detect_stanzas,
    normalize_whitespace,
    preprocess_poem,
    split_lines,
    tokenize_words,
)


def test_normalize_whitespace_unifies_breaks_and_spaces():
    assert normalize_whitespace("one\r\ntwo\rthree") == "one\ntwo\nthree"
    assert normalize_whitespace("a\t\tb   c  ") == "a b c"
    assert normalize_whitespace("\n\n  first\nlast\n\n") == " first\nlast"
    assert normalize_whitespace("") == ""


def test_split_lines():
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("") == []


def test_blank_lines_separate_stanzas():
    text = "one\ntwo\n\n\nthree\n   \nfour"

    assert detect_stanzas(text) == [["one", "two"], ["three"], ["four"]]
    assert detect_stanzas("") == []


def test_tokenizer_keeps_contractions_and_hyphenated_words():
    assert tokenize_words("Don't stop, well-known friend!") == ["Don't", "stop", "well-known", "friend"]
    assert tokenize_words("'Tis the season") == ["'Tis", "the", "season"]


def test_tokenizer_drops_numbers_and_punctuation():
    assert tokenize_words("In 1850 -- the end.") == ["In", "the", "end"]
    assert tokenize_words("   ") == []


def test_preprocess_poem_collects_structure():
    poem = preprocess_poem("The cat sat.\nThe hat, too!\n\nA dog\r\n")

    assert poem.stanzas == (("The cat sat.", "The hat, too!"), ("A dog",))
    assert poem.lines == ("The cat sat.", "The hat, too!", "A dog")
    assert poem.tokens == (("The", "cat", "sat"), ("The", "hat", "too"), ("A", "dog"))
    assert poem.line_count == 3
    assert poem.word_count == 8
    assert poem.as_dict()["line_count"] == 3


def test_preprocess_empty_text():
    poem = preprocess_poem("")

    assert poem.stanzas == ()
    assert poem.line_count == 0
    assert poem.word_count == 0
