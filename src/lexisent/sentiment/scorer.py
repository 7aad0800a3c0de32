from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lexisent.core.events import Label, SentimentResult, WordTag
from lexisent.core.logger import get_logger
from lexisent.core.timeutils import utcnow
from lexisent.sentiment.lexicon import DEFAULT_LEXICON, Lexicon
from lexisent.sentiment.tokenizer import tokenize

log = get_logger("scorer")

POLAR_CONFIDENCE_CAP = 0.9
NEUTRAL_CONFIDENCE_CAP = 0.8
NEUTRAL_CONFIDENCE_BASE = 0.3
NO_HITS_CONFIDENCE = 0.5

_TAG_SCORES: dict[Label, int] = {"positive": 1, "negative": -1, "neutral": 0}


@dataclass(frozen=True)
class LexiconCounts:
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def hits(self) -> int:
        return self.positive + self.negative + self.neutral


class LexiconSentimentScorer:
    """Word-list sentiment scorer.

    Counts lexicon hits per polarity and picks the label with a strict
    majority over both other counts; every tie is neutral. Confidence grows
    with hit density and is capped below 1.0.

    Usage:
        scorer = LexiconSentimentScorer()
        result = scorer.classify("What a wonderful day")
        tags = scorer.tag_words("What a wonderful day")
    """

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon

    def count_hits(self, tokens: Sequence[str]) -> LexiconCounts:
        pos = neg = neu = 0
        for token in tokens:
            label = self.lexicon.lookup(token)
            if label == "positive":
                pos += 1
            elif label == "negative":
                neg += 1
            elif label == "neutral":
                neu += 1
        return LexiconCounts(positive=pos, negative=neg, neutral=neu)

    def classify(self, text: str) -> SentimentResult:
        if not (text or "").strip():
            return SentimentResult(
                sentiment="neutral",
                confidence=0.0,
                positive_score=0.0,
                negative_score=0.0,
                neutral_score=1.0,
                word_count=0,
                timestamp=utcnow(),
            )

        tokens = tokenize(text)
        counts = self.count_hits(tokens)
        # Non-blank text can still yield no tokens ("!!!")
        total = max(len(tokens), 1)

        label: Label
        if counts.positive > counts.negative and counts.positive > counts.neutral:
            label = "positive"
            confidence = min(POLAR_CONFIDENCE_CAP, (counts.positive / total) * 2)
        elif counts.negative > counts.positive and counts.negative > counts.neutral:
            label = "negative"
            confidence = min(POLAR_CONFIDENCE_CAP, (counts.negative / total) * 2)
        else:
            label = "neutral"
            if counts.hits == 0:
                confidence = NO_HITS_CONFIDENCE
            else:
                confidence = min(
                    NEUTRAL_CONFIDENCE_CAP,
                    NEUTRAL_CONFIDENCE_BASE + (counts.neutral / total),
                )

        positive_score = counts.positive / total
        negative_score = counts.negative / total
        # Residual: neutral-list words and unmatched tokens share this mass
        neutral_score = 1 - positive_score - negative_score

        log.debug(
            f"classify: tokens={len(tokens)} pos={counts.positive} "
            f"neg={counts.negative} neu={counts.neutral} -> {label} ({confidence:.3f})"
        )
        return SentimentResult(
            sentiment=label,
            confidence=confidence,
            positive_score=positive_score,
            negative_score=negative_score,
            neutral_score=neutral_score,
            word_count=len(tokens),
            timestamp=utcnow(),
        )

    def tag_words(self, text: str) -> list[WordTag]:
        tags = []
        for token in tokenize(text):
            label = self.lexicon.lookup(token) or "neutral"
            tags.append(WordTag(word=token, sentiment=label, score=_TAG_SCORES[label]))
        return tags


_default_scorer = LexiconSentimentScorer()


def classify(text: str) -> SentimentResult:
    """Classify text with the built-in lexicon."""
    return _default_scorer.classify(text)


def tag_words(text: str) -> list[WordTag]:
    """Tag each token of text with the built-in lexicon."""
    return _default_scorer.tag_words(text)
