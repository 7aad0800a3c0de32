from __future__ import annotations

from .lexicon import DEFAULT_LEXICON, Lexicon, LexiconError, load_lexicon
from .scorer import LexiconCounts, LexiconSentimentScorer, classify, tag_words
from .tokenizer import tokenize

__all__ = [
    "DEFAULT_LEXICON",
    "Lexicon",
    "LexiconCounts",
    "LexiconError",
    "LexiconSentimentScorer",
    "classify",
    "load_lexicon",
    "tag_words",
    "tokenize",
]
