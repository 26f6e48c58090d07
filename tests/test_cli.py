"""
CLI tests — argument validation, result output, unreadable-file reporting
and exit codes for completed, cancelled and failed scans.
"""
import logging
from unittest import mock

import pytest

from conftest import sha256_hex
from dupfinder.cli import CLIApplication, EXIT_CANCELLED, main
from dupfinder.core.hasher import HasherImpl
from dupfinder.core.session import ScanSession


def _run_cli(*argv):
    return CLIApplication().run(list(argv))


@pytest.fixture(autouse=True)
def restore_logging():
    """CLIApplication reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestArgumentParsing:

    def test_defaults(self, temp_dir):
        args = CLIApplication.parse_args(["-i", str(temp_dir)])

        assert args.algorithm == "sha256"
        assert args.chunk_size == "4K"
        assert args.workers is None
        assert args.sort == "shortest-path"
        assert args.show_skipped is False

    def test_input_is_required(self):
        with pytest.raises(SystemExit) as exc:
            CLIApplication.parse_args([])
        assert exc.value.code == 2

    def test_unknown_algorithm_rejected(self, temp_dir):
        with pytest.raises(SystemExit) as exc:
            CLIApplication.parse_args(["-i", str(temp_dir), "--algorithm", "md5"])
        assert exc.value.code == 2


class TestValidation:
    """Invalid input must stop before any scanning starts."""

    def test_missing_path(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli("-i", str(temp_dir / "nope"))

        assert exc.value.code == 1
        assert "Path not found" in capsys.readouterr().err

    def test_invalid_chunk_size(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli("-i", str(temp_dir), "--chunk-size", "abc")

        assert exc.value.code == 1
        assert "Invalid chunk size" in capsys.readouterr().err

    def test_zero_chunk_size(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli("-i", str(temp_dir), "-c", "0")

        assert exc.value.code == 1
        assert "at least 1 byte" in capsys.readouterr().err

    def test_zero_workers(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli("-i", str(temp_dir), "--workers", "0")

        assert exc.value.code == 1
        assert "Worker count" in capsys.readouterr().err

    def test_quiet_and_verbose_conflict(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli("-i", str(temp_dir), "-q", "-v")

        assert exc.value.code == 1
        assert "cannot be used together" in capsys.readouterr().err


class TestOutput:

    def test_reports_duplicate_group(self, hello_world_dir, capsys):
        assert _run_cli("-i", str(hello_world_dir)) == 0

        out = capsys.readouterr().out
        assert "Found 1 duplicate groups (2 files)" in out
        assert f"sha256: {sha256_hex(b'hello')}" in out
        assert "a.txt" in out
        assert "b.txt" in out
        assert "c.txt" not in out

    def test_no_duplicates(self, temp_dir, capsys):
        (temp_dir / "one.txt").write_bytes(b"1")
        (temp_dir / "two.txt").write_bytes(b"2")

        assert _run_cli("-i", str(temp_dir)) == 0
        assert "No duplicate groups found." in capsys.readouterr().out

    def test_quiet_prints_nothing(self, hello_world_dir, capsys):
        assert _run_cli("-i", str(hello_world_dir), "-q") == 0
        assert capsys.readouterr().out == ""

    def test_xxhash_label(self, hello_world_dir, capsys):
        _run_cli("-i", str(hello_world_dir), "--algorithm", "xxhash")

        assert "xxh64: " in capsys.readouterr().out

    def test_verbose_prints_statistics(self, hello_world_dir, capsys):
        _run_cli("-i", str(hello_world_dir), "-v", "-w", "2")

        out = capsys.readouterr().out
        assert "📊 Scan Statistics:" in out
        assert "workers: 2" in out
        assert "Completed in" in out

    def test_sort_order_applied_to_paths(self, temp_dir, capsys):
        (temp_dir / "z.txt").write_bytes(b"same")
        (temp_dir / "a").mkdir()
        (temp_dir / "a" / "deep.txt").write_bytes(b"same")

        _run_cli("-i", str(temp_dir))
        out = capsys.readouterr().out
        assert out.index("z.txt") < out.index("deep.txt")

        _run_cli("-i", str(temp_dir), "--sort", "alphabetical")
        out = capsys.readouterr().out
        assert out.index("deep.txt") < out.index("z.txt")

    def test_show_skipped_lists_unreadable_files(self, hello_world_dir, capsys):
        """Dropped files never appear in groups but are listed on request."""
        real_digest = HasherImpl.compute_digest

        def flaky_digest(self, path):
            if path.endswith("b.txt"):
                raise PermissionError(13, "Permission denied")
            return real_digest(self, path)

        with mock.patch.object(HasherImpl, "compute_digest", autospec=True, side_effect=flaky_digest):
            assert _run_cli("-i", str(hello_world_dir), "--show-skipped") == 0

        out = capsys.readouterr().out
        assert "No duplicate groups found." in out
        assert "Skipped 1 unreadable file(s)" in out
        assert "b.txt: " in out
        assert "Permission denied" in out

    def test_show_skipped_when_everything_readable(self, hello_world_dir, capsys):
        _run_cli("-i", str(hello_world_dir), "--show-skipped")

        assert "No unreadable files." in capsys.readouterr().out


class TestExitCodes:

    def test_cancelled_scan_exits_with_130(self, hello_world_dir, capsys):
        """A cancelled scan still prints its (partial) result, then reports cancellation."""
        real_start = ScanSession.start

        def start_cancelled(self, root):
            self.cancel_token.signal()
            real_start(self, root)

        with mock.patch.object(ScanSession, "start", start_cancelled):
            assert _run_cli("-i", str(hello_world_dir)) == EXIT_CANCELLED

        captured = capsys.readouterr()
        assert "No duplicate groups found." in captured.out
        assert "results are partial" in captured.err

    def test_main_success(self, hello_world_dir):
        with pytest.raises(SystemExit) as exc:
            main(["-i", str(hello_world_dir), "-q"])
        assert exc.value.code == 0

    def test_main_unexpected_error(self, hello_world_dir, capsys, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=RuntimeError("kaboom")):
            with pytest.raises(SystemExit) as exc:
                main(["-i", str(hello_world_dir)])

        assert exc.value.code == 1
        assert "Unexpected error: kaboom" in capsys.readouterr().err

    def test_main_reraises_in_debug_mode(self, hello_world_dir, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        with mock.patch.object(CLIApplication, "run", side_effect=RuntimeError("kaboom")):
            with pytest.raises(RuntimeError, match="kaboom"):
                main(["-i", str(hello_world_dir)])

    def test_main_keyboard_interrupt(self, hello_world_dir):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                main(["-i", str(hello_world_dir)])
        assert exc.value.code == EXIT_CANCELLED

    def test_failed_scan_exits_with_1(self, hello_world_dir, capsys):
        with mock.patch("dupfinder.core.coordinator.ScanCoordinator.run", side_effect=RuntimeError("disk gone")):
            with pytest.raises(SystemExit) as exc:
                _run_cli("-i", str(hello_world_dir))

        assert exc.value.code == 1
        assert "Scan failed: disk gone" in capsys.readouterr().err
