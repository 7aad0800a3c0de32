from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from lexisent.core.timeutils import epoch_ms

Label = Literal["positive", "negative", "neutral"]

@dataclass(frozen=True)
class SentimentResult:
    sentiment: Label
    confidence: float      # 0..0.9
    positive_score: float  # 0..1
    negative_score: float  # 0..1
    neutral_score: float   # residual, 0..1
    word_count: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "sentiment": self.sentiment,
            "confidence": self.confidence,
            "positiveScore": self.positive_score,
            "negativeScore": self.negative_score,
            "neutralScore": self.neutral_score,
            "wordCount": self.word_count,
            "timestamp": epoch_ms(self.timestamp),
        }

@dataclass(frozen=True)
class WordTag:
    word: str
    sentiment: Label
    score: int  # +1 / -1 / 0

    def to_dict(self) -> dict[str, Any]:
        return {"word": self.word, "sentiment": self.sentiment, "score": self.score}
