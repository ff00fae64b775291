#!/usr/bin/env python3
"""
twinfind CLI — Command line interface for duplicate file detection.
Runs the engine once and renders its groups and metrics as txt, csv or json.
Read-only: no file is ever modified.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from twinfind.commands import DeduplicationCommand
from twinfind.core.models import DuplicateGroup, RunMetrics, ScanParams
from twinfind.services.report_service import ReportService
from twinfind.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    FORMAT_ALIASES, FORMAT_CHOICES, FORMAT_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="twinfind",
            description="twinfind — Scan a directory and report groups of duplicate files",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "directory",
            type=str,
            help="The directory to scan for duplicate files"
        )

        # Output options
        parser.add_argument(
            "--output", "-o",
            default=None,
            type=str,
            metavar="PATH",
            help="Write results to a file instead of standard output"
        )
        parser.add_argument(
            "--format", "-f",
            choices=FORMAT_CHOICES,
            default="txt",
            type=str,
            dest="format",
            help=FORMAT_HELP_TEXT
        )

        # Engine options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="blake3",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=None,
            type=int,
            metavar="N",
            help="Worker threads for scanning and hashing. Default: number of CPU cores"
        )

        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, statistics and info-level logs on stderr"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging (every skipped file is reported)"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        root_path = Path(args.directory).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.directory}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.directory}")

        if args.workers is not None and args.workers < 1:
            self.error_exit("Worker count must be at least 1")

        if args.output:
            out_parent = Path(args.output).resolve().parent
            if not out_parent.is_dir():
                self.error_exit(f"Output directory not found: {out_parent}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dir=str(Path(args.directory).resolve()),
                max_workers=args.workers,
                algorithm=ALGORITHM_ALIASES[args.algorithm]
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    @staticmethod
    def configure_logging(args: argparse.Namespace) -> None:
        if args.debug:
            logging.getLogger().setLevel(logging.DEBUG)
        elif args.verbose:
            logging.getLogger().setLevel(logging.INFO)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def run_search(self, params: ScanParams) -> Tuple[List[DuplicateGroup], RunMetrics]:
        """Execute the duplicate search."""
        command = DeduplicationCommand()
        if self.verbose:
            print(f"Searching duplicates (algorithm: {params.algorithm.display_name}, "
                  f"workers: {params.worker_count})...", file=sys.stderr)

        try:
            groups, metrics = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RuntimeError as e:
            self.error_exit(f"Search failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(metrics.print_summary(), file=sys.stderr)

        return groups, metrics

    def output_results(self, groups: List[DuplicateGroup], metrics: RunMetrics,
                       args: argparse.Namespace) -> None:
        """Render the report to a file or to stdout."""
        fmt = FORMAT_ALIASES[args.format]
        try:
            ReportService.write(groups, metrics, fmt, output_path=args.output)
        except OSError as e:
            self.error_exit(f"Cannot write report: {e}")

        if args.output and not self.quiet:
            print(f"Results written to {args.output} in {fmt.value} format.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging(args)

        self.validate_args(args)
        params = self.create_params(args)

        if not params.algorithm.is_cryptographic:
            self.warning("xxh128 is not a cryptographic hash; collisions are unlikely but possible")

        groups, metrics = self.run_search(params)
        self.output_results(groups, metrics, args)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
