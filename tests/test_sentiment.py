import pytest

from poem_prosody.core.sentiment import (
    SentimentScore,
    analyze_sentiment,
    tokenize_for_sentiment,
)


def test_tokenizer_lowercases_and_drops_punctuation():
    assert tokenize_for_sentiment("Oh, Happy  day!") == ["oh", "happy", "day"]
    assert tokenize_for_sentiment("don't stop") == ["don't", "stop"]


@pytest.mark.parametrize("text", [None, "", "   ", "...!?", 42])
def test_blank_or_invalid_input_is_neutral(text):
    assert analyze_sentiment(text) == SentimentScore.neutral()


def test_positive_words_raise_the_score():
    result = analyze_sentiment("What a happy day")

    assert result.score > 0
    assert result.positive == ("happy",)
    assert result.negative == ()
    assert result.comparative == pytest.approx(result.score / 4)


def test_negative_words_lower_the_score():
    result = analyze_sentiment("so sad and lonely")

    assert result.score < 0
    assert "sad" in result.negative
    assert result.positive == ()


def test_negation_flips_the_following_word():
    plain = analyze_sentiment("I am happy")
    negated = analyze_sentiment("I am not happy")

    assert negated.score == -plain.score
    assert negated.negative == ("happy",)
    assert negated.positive == ()


def test_mixed_text_reports_both_polarities():
    result = analyze_sentiment("happy tears and sad smiles")

    assert "happy" in result.positive
    assert "sad" in result.negative


def test_as_dict_is_plain_data():
    data = analyze_sentiment("happy").as_dict()

    assert set(data) == {"score", "comparative", "positive", "negative"}
    assert data["positive"] == ["happy"]
