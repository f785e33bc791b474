"""Token-based text similarity strategies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from rapidfuzz import fuzz

_PUNCTUATION_PATTERN = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WHITESPACE_PATTERN = re.compile(r"\s+")

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "の", "に", "は", "を", "た", "が", "で", "て", "と", "し", "れ", "さ",
        "ある", "いる", "する", "ます", "です", "した", "から", "など",
        "その", "この", "これ", "それ", "あの", "あれ",
    }
)


@runtime_checkable
class TextSimilarity(Protocol):
    """Similarity contract used by the matcher: a score in [0, 1]."""

    def similarity(self, left: str | None, right: str | None) -> float:
        """Return how similar two free-text fields are."""


@dataclass
class TokenizerConfig:
    """Token filtering rules shared by the similarity strategies."""

    min_token_length: int = 2
    stop_words: frozenset[str] = field(default_factory=lambda: DEFAULT_STOP_WORDS)


def tokenize(text: str | None, config: TokenizerConfig | None = None) -> list[str]:
    """Lowercase, strip punctuation and split on whitespace, dropping stop words."""
    if not text:
        return []
    config = config or TokenizerConfig()
    normalized = _PUNCTUATION_PATTERN.sub("", text.lower())
    normalized = _WHITESPACE_PATTERN.sub(" ", normalized).strip()
    if not normalized:
        return []
    return [
        token
        for token in normalized.split(" ")
        if len(token) >= config.min_token_length and token not in config.stop_words
    ]


class JaccardTextSimilarity:
    """Jaccard coefficient over the two token sets."""

    method = "jaccard"

    def __init__(self, *, config: TokenizerConfig | None = None) -> None:
        self._config = config or TokenizerConfig()

    def similarity(self, left: str | None, right: str | None) -> float:
        left_tokens = set(tokenize(left, self._config))
        right_tokens = set(tokenize(right, self._config))
        if not left_tokens or not right_tokens:
            return 0.0
        union = left_tokens | right_tokens
        return len(left_tokens & right_tokens) / len(union)


class FuzzyTokenSimilarity:
    """RapidFuzz token-set ratio over the filtered tokens, scaled to [0, 1].

    Tolerates near-duplicate wording (inflections, typos) that Jaccard scores
    as disjoint tokens.
    """

    method = "fuzzy_token_set"

    def __init__(self, *, config: TokenizerConfig | None = None) -> None:
        self._config = config or TokenizerConfig()

    def similarity(self, left: str | None, right: str | None) -> float:
        left_tokens = tokenize(left, self._config)
        right_tokens = tokenize(right, self._config)
        if not left_tokens or not right_tokens:
            return 0.0
        ratio = fuzz.token_set_ratio(" ".join(left_tokens), " ".join(right_tokens))
        return min(max(ratio / 100.0, 0.0), 1.0)


__all__ = [
    "DEFAULT_STOP_WORDS",
    "FuzzyTokenSimilarity",
    "JaccardTextSimilarity",
    "TextSimilarity",
    "TokenizerConfig",
    "tokenize",
]
