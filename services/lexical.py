import math
import re
from typing import Iterable, List, Sequence

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"[.!?]+")


class WordList(tuple):
    """An immutable, ordered list of lowercase words or phrases.

    Entries are matched as substrings, never as whole words, so "like"
    also matches "liked" and "hi" matches "this".
    """

    def __new__(cls, words: Iterable[str], name: str = ""):
        instance = super().__new__(cls, (w.lower() for w in words))
        instance.name = name
        return instance

    def __repr__(self) -> str:
        return f"WordList({self.name!r}, {list(self)!r})"


def tokenize(text: str) -> List[str]:
    """Split on runs of whitespace, dropping empty tokens."""
    return [token for token in _WHITESPACE.split(text) if token]


def split_sentences(text: str) -> List[str]:
    """Split on runs of '.', '!' and '?', dropping blank fragments."""
    return [s for s in _SENTENCE_BREAK.split(text) if s.strip()]


def phrases_in_text(text: str, words: Sequence[str]) -> List[str]:
    """Return the distinct list entries found anywhere in the text."""
    lowered = text.lower()
    return [word for word in dict.fromkeys(words) if word in lowered]


def tokens_matching(tokens: Sequence[str], words: Sequence[str]) -> List[str]:
    """Return every lowercased token containing one of the entries."""
    lowered = (token.lower() for token in tokens)
    return [token for token in lowered if any(word in token for word in words)]


def clamp(value, low, high):
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    # .5 always rounds up, unlike the built-in banker's rounding
    return int(math.floor(value + 0.5))
