"""
Unit tests for ProgressState and CancellationToken.
Verifies concurrent progress accounting and single-use cancellation semantics.
"""
import threading

import pytest

from dupfinder.core.channel import ProgressState, CancellationToken


class TestProgressState:
    """Test progress accounting shared by workers and observers."""

    def test_initial_value_is_zero(self):
        assert ProgressState().get() == 0.0

    def test_advance_increments_by_one(self):
        progress = ProgressState()

        assert progress.advance(total=4) == 0.25
        assert progress.advance(total=4) == 0.5
        assert progress.processed == 2

    def test_advance_with_absolute_count(self):
        progress = ProgressState()

        assert progress.advance(done=3, total=4) == 0.75

    def test_never_moves_backwards(self):
        """A stale absolute count delivered late must not lower the value."""
        progress = ProgressState()
        progress.advance(done=3, total=4)

        assert progress.advance(done=1, total=4) == 0.75
        assert progress.get() == 0.75

    def test_capped_at_one(self):
        progress = ProgressState()
        progress.advance(done=10, total=4)

        assert progress.get() == 1.0

    @pytest.mark.parametrize("total", [0, -1])
    def test_rejects_non_positive_total(self, total):
        with pytest.raises(ValueError):
            ProgressState().advance(total=total)

    def test_reset_returns_to_rest(self):
        progress = ProgressState()
        progress.advance(done=2, total=2)

        progress.reset()

        assert progress.get() == 0.0
        assert progress.processed == 0

    def test_concurrent_advances_reach_exactly_one(self):
        """
        CRITICAL: no increment may be lost when many threads advance at once.
        After exactly N advances with total N the value must be 1.0.
        """
        total = 800
        progress = ProgressState()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(total // 8):
                progress.advance(total=total)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert progress.processed == total
        assert progress.get() == 1.0

    def test_observed_values_are_monotonic(self):
        """An observer polling during concurrent updates never sees a decrease."""
        total = 2000
        progress = ProgressState()
        observed = []
        done = threading.Event()

        def observer():
            while not done.is_set():
                observed.append(progress.get())

        watcher = threading.Thread(target=observer)
        watcher.start()
        writers = [
            threading.Thread(target=lambda: [progress.advance(total=total) for _ in range(total // 4)])
            for _ in range(4)
        ]
        for t in writers:
            t.start()
        for t in writers:
            t.join()
        done.set()
        watcher.join()

        assert observed == sorted(observed)
        assert progress.get() == 1.0


class TestCancellationToken:
    """Test cooperative stop signal."""

    def test_not_signaled_initially(self):
        assert CancellationToken().is_signaled() is False

    def test_signal_is_idempotent(self):
        token = CancellationToken()
        token.signal()
        token.signal()

        assert token.is_signaled() is True

    def test_signal_from_another_thread_is_visible(self):
        token = CancellationToken()
        thread = threading.Thread(target=token.signal)
        thread.start()
        thread.join()

        assert token.is_signaled() is True

    def test_claim_is_single_use(self):
        """A token belongs to exactly one scan."""
        token = CancellationToken()
        token.claim()

        assert token.claimed is True
        with pytest.raises(RuntimeError, match="already used"):
            token.claim()

    def test_claim_does_not_signal(self):
        token = CancellationToken()
        token.claim()

        assert token.is_signaled() is False
