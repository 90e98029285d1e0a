# backend/tests/test_normalizers.py
import pytest

from echosoul.domain.nlp.normalizers import make_bigrams, split_sentences, stem, tokenize


def test_empty_input_yields_no_tokens():
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_suffix_stripping_and_bigrams():
    assert tokenize("The running dog is quickly jumped") == [
        "runn", "dog", "quick", "jump",
        "runn dog", "dog quick", "quick jump",
    ]


def test_punctuation_is_a_separator():
    assert tokenize("Coffee, tea; books!") == [
        "coffee", "tea", "books", "coffee tea", "tea books",
    ]


def test_single_token_gets_no_bigram():
    assert tokenize("Hello!!") == ["hello"]


@pytest.mark.parametrize("text", ["a an to of", "thing", "you and the"])
def test_short_and_stop_tokens_are_dropped(text):
    # "thing" strips to "th", which is too short to keep
    assert tokenize(text) == []


def test_bigrams_can_be_disabled():
    assert tokenize("handle conflict calmly", bigrams=False) == ["handle", "conflict", "calm"]


@pytest.mark.parametrize("word,expected", [
    ("walking", "walk"),
    ("slowly", "slow"),
    ("jumped", "jump"),
    ("cats", "cats"),
    ("sing", "s"),
])
def test_stem_is_exact_suffix_match(word, expected):
    assert stem(word) == expected


def test_emoji_never_becomes_a_token():
    assert tokenize("pizza 🍕 night") == ["pizza", "night", "pizza night"]


def test_make_bigrams_preserves_order():
    assert make_bigrams(["a1", "b2", "c3"]) == ["a1 b2", "b2 c3"]


def test_split_sentences():
    assert split_sentences("One. Two?  Three!") == ["One.", "Two?", "Three!"]
