from __future__ import annotations

import threading
from typing import Callable, Optional

from lexisent.core.logger import get_logger

log = get_logger("debounce")


class Debouncer:
    """Delay a callback until input has been quiet for delay_seconds.

    Each submit() restarts the timer, so only the last text submitted
    within the window reaches the callback. Blank text cancels any pending
    call and fires on_clear instead.

    Usage:
        debouncer = Debouncer(lambda text: show(classify(text)), delay_seconds=0.5)
        debouncer.submit("I love")
        debouncer.submit("I love this")  # only this one is analyzed
    """

    def __init__(
        self,
        callback: Callable[[str], None],
        delay_seconds: float = 0.5,
        on_clear: Optional[Callable[[], None]] = None,
    ):
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self.callback = callback
        self.delay_seconds = delay_seconds
        self.on_clear = on_clear
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[str] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def submit(self, text: str) -> None:
        with self._lock:
            self._cancel_locked()
            if not text.strip():
                clear = self.on_clear
            else:
                clear = None
                self._pending = text
                self._generation += 1
                self._timer = threading.Timer(
                    self.delay_seconds, self._fire, args=(self._generation,)
                )
                self._timer.daemon = True
                self._timer.start()
        if clear is not None:
            clear()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def flush(self) -> None:
        """Run the pending callback now, if any."""
        with self._lock:
            text = self._pending
            self._cancel_locked()
        if text is not None:
            self.callback(text)

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer submit superseded this timer
            if generation != self._generation:
                return
            text = self._pending
            self._pending = None
            self._timer = None
        if text is None:
            return
        try:
            self.callback(text)
        except Exception as e:
            log.exception(f"Debounced callback error: {e}")
