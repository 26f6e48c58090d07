"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/channel.py
Progress and cancellation primitives shared between scan workers and observers.

ProgressState      : fraction of discovered files processed, safe for concurrent writers
CancellationToken  : single-use cooperative stop signal, polled between files
"""

import threading
from typing import Optional


class ProgressState:
    """
    Scalar progress in [0.0, 1.0].

    Workers call advance() once per processed file; observers poll get()
    at their own cadence. The processed counter and the stored fraction
    are updated under one lock so no increment is ever lost.
    """

    def __init__(self):
        self._value = 0.0
        self._processed = 0
        self._lock = threading.Lock()

    def get(self) -> float:
        with self._lock:
            return self._value

    @property
    def processed(self) -> int:
        with self._lock:
            return self._processed

    def advance(self, done: Optional[int] = None, total: int = 0) -> float:
        """
        Record progress and return the new fraction.

        Args:
            done: Absolute number of processed files. When omitted the internal
                  counter is incremented by one.
            total: Number of files discovered for this scan.
        """
        if total <= 0:
            raise ValueError("Total must be positive")

        with self._lock:
            if done is None:
                self._processed += 1
            else:
                self._processed = max(self._processed, done)
            value = min(1.0, self._processed / total)
            # Never move backwards
            if value > self._value:
                self._value = value
            return self._value

    def reset(self) -> None:
        """Return to rest state. Only observers call this; the engine never does."""
        with self._lock:
            self._value = 0.0
            self._processed = 0

    def __repr__(self):
        return f"<ProgressState value={self.get():.3f}>"


class CancellationToken:
    """
    Broadcast stop signal for a single scan.

    signal() may be called any number of times from any thread.
    is_signaled() never blocks. A token belongs to exactly one scan:
    the coordinator claims it on start and a second claim is an error.
    """

    def __init__(self):
        self._event = threading.Event()
        self._claimed = False
        self._claim_lock = threading.Lock()

    def signal(self) -> None:
        self._event.set()

    def is_signaled(self) -> bool:
        return self._event.is_set()

    def claim(self) -> None:
        with self._claim_lock:
            if self._claimed:
                raise RuntimeError("CancellationToken already used by another scan; create a new token")
            self._claimed = True

    @property
    def claimed(self) -> bool:
        return self._claimed

    def __repr__(self):
        return f"<CancellationToken signaled={self.is_signaled()}>"
