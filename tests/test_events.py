"""Tests for result types."""
import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

from lexisent.core.events import SentimentResult, WordTag
from lexisent.core.timeutils import epoch_ms


class TestSentimentResult:

    def test_to_dict(self, sample_result: SentimentResult):
        assert sample_result.to_dict() == {
            "sentiment": "positive",
            "confidence": 0.9,
            "positiveScore": 1.0,
            "negativeScore": 0.0,
            "neutralScore": 0.0,
            "wordCount": 3,
            "timestamp": 1704164645000,
        }

    def test_frozen(self, sample_result: SentimentResult):
        with pytest.raises(FrozenInstanceError):
            sample_result.confidence = 0.1  # type: ignore[misc]


class TestWordTag:

    def test_to_dict(self):
        tag = WordTag(word="great", sentiment="positive", score=1)
        assert tag.to_dict() == {"word": "great", "sentiment": "positive", "score": 1}


class TestEpochMs:

    @pytest.mark.parametrize(
        "microsecond, expected",
        [(0, 1704164645000), (1000, 1704164645001), (123000, 1704164645123), (999000, 1704164645999)],
    )
    def test_exact_milliseconds(self, microsecond: int, expected: int):
        """Test that millisecond conversion never rounds down a whole millisecond."""
        dt = datetime(2024, 1, 2, 3, 4, 5, microsecond, tzinfo=timezone.utc)
        assert epoch_ms(dt) == expected

    def test_other_timezone(self):
        """Test that offsets are normalized to UTC."""
        plus_two = timezone(timedelta(hours=2))
        dt = datetime(2024, 1, 2, 5, 4, 5, tzinfo=plus_two)
        assert epoch_ms(dt) == 1704164645000
