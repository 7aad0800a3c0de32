from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()

def epoch_ms(dt: datetime) -> int:
    """Milliseconds since the Unix epoch, the shape JSON consumers expect."""
    # Integer timedelta division; float timestamps can land 1ms low
    return (dt.astimezone(timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
