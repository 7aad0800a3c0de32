from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from lexisent.core.events import Label
from lexisent.core.logger import get_logger
from lexisent.sentiment.tokenizer import tokenize

log = get_logger("lexicon")

POS = (
    "amazing", "awesome", "brilliant", "excellent", "fantastic", "great", "happy",
    "incredible", "love", "perfect", "wonderful", "good", "best", "beautiful",
    "outstanding", "superb", "magnificent", "delightful", "pleasant", "satisfied",
    "impressive", "remarkable", "exceptional", "marvelous", "terrific", "fabulous",
    "gorgeous", "splendid", "stellar", "phenomenal", "enjoy", "like", "appreciate",
    "adore", "treasure", "cherish", "celebrate", "success", "victory", "triumph",
)
NEG = (
    "awful", "terrible", "horrible", "bad", "worst", "hate", "disgusting",
    "disappointing", "frustrating", "annoying", "angry", "sad", "depressing",
    "pathetic", "useless", "worthless", "dreadful", "appalling", "shocking",
    "disturbing", "offensive", "unacceptable", "ridiculous", "stupid", "idiotic",
    "dislike", "despise", "detest", "loathe", "failure", "disaster", "catastrophe",
    "nightmare", "regret", "mistake", "problem", "issue", "trouble", "difficulty",
)
NEU = (
    "okay", "fine", "average", "normal", "standard", "typical", "usual",
    "regular", "common", "ordinary", "moderate", "fair", "decent", "adequate",
)


class LexiconError(Exception):
    """Raised when a lexicon file cannot be read or parsed."""
    pass


def _normalize(words: Iterable[str]) -> frozenset[str]:
    """Reduce each entry to the single token the tokenizer would produce.

    Entries that do not reduce to exactly one token could never match and
    are dropped with a warning.
    """
    normalized = set()
    for word in words:
        if not word or not word.strip():
            continue
        tokens = tokenize(word)
        if len(tokens) != 1:
            log.warning(f"Dropping lexicon entry {word!r}: tokenizes to {tokens}")
            continue
        normalized.add(tokens[0])
    return frozenset(normalized)


@dataclass(frozen=True)
class Lexicon:
    """Three word lists, one per polarity.

    Lookup checks positive, then negative, then neutral, so a word that
    appears in more than one list takes the polarity of the first list
    that contains it.
    """

    positive: frozenset[str] = field(default_factory=frozenset)
    negative: frozenset[str] = field(default_factory=frozenset)
    neutral: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_words(
        cls,
        positive: Iterable[str] = (),
        negative: Iterable[str] = (),
        neutral: Iterable[str] = (),
    ) -> "Lexicon":
        lexicon = cls(
            positive=_normalize(positive),
            negative=_normalize(negative),
            neutral=_normalize(neutral),
        )
        overlaps = lexicon.overlaps()
        if overlaps:
            log.warning(
                "Lexicon lists overlap; positive > negative > neutral decides: "
                + ", ".join(f"{k}={sorted(v)}" for k, v in overlaps.items())
            )
        return lexicon

    def lookup(self, token: str) -> Optional[Label]:
        if token in self.positive:
            return "positive"
        if token in self.negative:
            return "negative"
        if token in self.neutral:
            return "neutral"
        return None

    def overlaps(self) -> dict[str, frozenset[str]]:
        """Words present in more than one list, keyed by list pair."""
        pairs = {
            "positive/negative": self.positive & self.negative,
            "positive/neutral": self.positive & self.neutral,
            "negative/neutral": self.negative & self.neutral,
        }
        return {k: v for k, v in pairs.items() if v}

    def __len__(self) -> int:
        return len(self.positive | self.negative | self.neutral)


DEFAULT_LEXICON = Lexicon.from_words(POS, NEG, NEU)


def load_lexicon(path: Path | str) -> Lexicon:
    """Load a lexicon from a JSON document.

    Expected shape: {"positive": [...], "negative": [...], "neutral": [...]}.
    Missing keys mean empty lists.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LexiconError(f"Cannot read lexicon file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LexiconError(f"Invalid JSON in lexicon file {path}: {e}") from e

    if not isinstance(data, dict):
        raise LexiconError(f"Lexicon file {path} must contain a JSON object")

    lists = {}
    for key in ("positive", "negative", "neutral"):
        words = data.get(key, [])
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise LexiconError(f"Lexicon key '{key}' in {path} must be a list of strings")
        lists[key] = words

    lexicon = Lexicon.from_words(**lists)
    log.info(
        f"Loaded lexicon from {path}: "
        f"{len(lexicon.positive)} positive, {len(lexicon.negative)} negative, "
        f"{len(lexicon.neutral)} neutral"
    )
    return lexicon
