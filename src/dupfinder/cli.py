#!/usr/bin/env python3
"""
DupFinder CLI — Command line interface for content-based duplicate file detection.
Implements the same core engine as GUI but with console-based interaction.
Read-only: files are hashed and reported, never modified.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

from dupfinder.core.models import DuplicateGroup, DuplicateGroups, ScanParams, ScanState, ScanStats
from dupfinder.core.grouper import to_duplicate_groups
from dupfinder.core.session import ScanSession
from dupfinder.commands import ScanCommand
from dupfinder.utils.convert_utils import ConvertUtils
from dupfinder.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    SORT_ALIASES, SORT_CHOICES, SORT_HELP_TEXT,
    EPILOG_TEXT
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# Progress redraw cadence while the scan runs in the background
POLL_INTERVAL = 0.1

EXIT_CANCELLED = 130


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.session: Optional[ScanSession] = None

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfinder",
            description="DupFinder — find duplicate files by content",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Directory (or file) to scan for duplicates"
        )

        # Engine options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=None,
            type=int,
            metavar='',
            help="Number of hashing threads. Default: number of CPUs"
        )
        parser.add_argument(
            "--chunk-size", "-c",
            default="4K",
            type=str,
            metavar='',
            dest="chunk_size",
            help="Read buffer per file (e.g., 4K, 64KB, 1MB). Default: 4K"
        )
        parser.add_argument(
            "--sort",
            choices=SORT_CHOICES,
            default="shortest-path",
            type=str,
            help=SORT_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--show-skipped",
            action="store_true",
            dest="show_skipped",
            help="List files that could not be read"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, statistics and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        root_path = Path(args.input).expanduser()
        if not root_path.exists():
            self.error_exit(f"Path not found: {args.input}")

        if args.workers is not None and args.workers < 1:
            self.error_exit("Worker count must be at least 1")

        try:
            ConvertUtils.parse_chunk_size(args.chunk_size)
        except ValueError as e:
            self.error_exit(f"Invalid chunk size: {e}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dir=str(Path(args.input).expanduser().resolve()),
                chunk_size_str=args.chunk_size,
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                workers=args.workers,
                sort_order=SORT_ALIASES[args.sort],
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def draw_progress(self, fraction: float) -> None:
        """CLI progress line on stderr (verbose mode only)."""
        if not self.verbose:
            return
        stats = self.session.stats if self.session else None
        if stats and stats.files_total:
            sys.stderr.write(
                f"\r  [hashing] {stats.files_processed}/{stats.files_total} ({fraction * 100:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [hashing] {fraction * 100:.1f}%")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> ScanSession:
        """
        Execute the scan in a background session and poll its progress.
        Ctrl+C signals cooperative cancellation; the partial result is kept.
        """
        self.session = ScanSession(ScanCommand.build_coordinator(params))
        if self.verbose:
            print(f"Finding duplicates (algorithm: {params.algorithm.display_name}, "
                  f"workers: {self.session.coordinator.max_workers})...")

        self.session.start(params.root_dir)
        while True:
            try:
                if self.session.wait(POLL_INTERVAL):
                    break
                self.draw_progress(self.session.progress)
            except KeyboardInterrupt:
                self.warning("Cancelling scan, waiting for running hashes to finish...")
                self.session.cancel()

        if self.verbose:
            self.draw_progress(self.session.progress)
            sys.stderr.write("\n")

        if self.session.state == ScanState.FAILED:
            self.error_exit(f"Scan failed: {self.session.error}")

        if self.verbose and self.session.stats:
            print()
            print(self.session.stats.print_summary())

        return self.session

    def output_results(self, groups: DuplicateGroups, params: ScanParams) -> List[DuplicateGroup]:
        """Output duplicate groups as plain text."""
        ordered = to_duplicate_groups(groups, params.sort_order)
        if self.quiet:
            return ordered

        if not ordered:
            print("No duplicate groups found.")
            return ordered

        total_files = sum(g.duplicate_count for g in ordered)
        print(f"\nFound {len(ordered)} duplicate groups ({total_files} files)")

        for idx, group in enumerate(ordered, 1):
            print(f"\n📁 Group {idx} | Files: {group.duplicate_count} | "
                  f"{params.algorithm.value}: {group.fingerprint}")
            for path in group.paths:
                print(f"   {path}")
        return ordered

    def output_skipped(self, stats: Optional[ScanStats]) -> None:
        """List files dropped because they could not be read."""
        if not stats or not stats.failed_paths:
            print("\nNo unreadable files.")
            return
        print(f"\n⚠️  Skipped {len(stats.failed_paths)} unreadable file(s):")
        for path in sorted(stats.failed_paths):
            print(f"   {path}: {stats.failed_paths[path]}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.ERROR,
            format=LOG_FORMAT,
            force=True
        )

    def run(self, args=None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(args)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning: {params.root_dir}")

        session = self.run_scan(params)
        self.output_results(session.result or {}, params)

        if args.show_skipped and not self.quiet:
            self.output_skipped(session.stats)

        elapsed = time.time() - self.start_time
        if session.state == ScanState.CANCELLED:
            self.warning("Scan cancelled — results are partial")
            return EXIT_CANCELLED

        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")
        return 0


def main(args=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        code = app.run(args)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(EXIT_CANCELLED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
