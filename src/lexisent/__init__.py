from __future__ import annotations

from lexisent.core.events import Label, SentimentResult, WordTag
from lexisent.sentiment.scorer import classify, tag_words

__all__ = ["Label", "SentimentResult", "WordTag", "classify", "tag_words"]
