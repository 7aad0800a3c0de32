from __future__ import annotations

import re

# Anything that is not a letter, digit or whitespace. \w admits "_", so it is
# listed separately.
_STRIP = re.compile(r"[^\w\s]|_")

def tokenize(text: str) -> list[str]:
    """Lowercase, drop punctuation and split on whitespace runs."""
    return _STRIP.sub("", (text or "").lower()).split()
