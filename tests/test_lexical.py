from services.lexical import (
    WordList,
    clamp,
    phrases_in_text,
    round_half_up,
    split_sentences,
    tokenize,
    tokens_matching,
)


def test_tokenize_drops_empty_tokens():
    assert tokenize("  hello   world \n") == ["hello", "world"]
    assert tokenize("") == []
    assert tokenize(" \t ") == []


def test_split_sentences_discards_blank_fragments():
    assert split_sentences("Hi there. How are you?! ") == ["Hi there", " How are you"]
    assert split_sentences("...!?") == []
    assert split_sentences("no terminator") == ["no terminator"]


def test_word_list_is_lowercase_and_immutable():
    words = WordList(["Um", "You Know"], name="fillers")
    assert words == ("um", "you know")
    assert words.name == "fillers"
    assert isinstance(words, tuple)


def test_phrases_in_text_counts_each_entry_once():
    words = WordList(["like", "love", "like"])
    assert phrases_in_text("I LIKED it, I liked it", words) == ["like"]


def test_phrases_in_text_matches_inside_other_words():
    assert phrases_in_text("this is fine", WordList(["hi"])) == ["hi"]


def test_tokens_matching_keeps_repeats_and_substrings():
    tokens = ["Liked", "so", "also", "ok", "so"]
    assert tokens_matching(tokens, WordList(["like", "so"])) == ["liked", "so", "also", "so"]


def test_clamp():
    assert clamp(12, 1, 10) == 10
    assert clamp(-3, 1, 10) == 1
    assert clamp(7.5, 1, 10) == 7.5


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(62.5) == 63
    assert round_half_up(2.4) == 2
    assert round_half_up(99.6) == 100
