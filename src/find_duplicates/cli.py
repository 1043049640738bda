#!/usr/bin/env python3
"""
find-duplicates CLI: console front end for the duplicate detection engine.
Lists duplicate groups with a one-line summary, and optionally deletes all but one
copy per group (to the system trash by default) or saves the listed paths to a file.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, NoReturn, Sequence, Set

from find_duplicates.core.models import DuplicateGroup, ErrorPolicy, FindParams, DetectionStats
from find_duplicates.core.exclusion import ExclusionPatternError
from find_duplicates.core.summary import duplication_status
from find_duplicates.commands import FindDuplicatesCommand
from find_duplicates.utils.convert_utils import ConvertUtils
from find_duplicates.services.file_service import FileService
from find_duplicates.services.duplicate_service import DuplicateService
from find_duplicates.aliases import (
    KEEP_ALIASES, KEEP_CHOICES, KEEP_HELP_TEXT, EXCLUDE_PATTERNS_HELP_TEXT, EPILOG_TEXT
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

logger = logging.getLogger(__name__)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="find-duplicates",
            description="find-duplicates: locate byte-identical files across directory trees",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            nargs="+",
            type=str,
            dest="roots",
            help="Directories (space separated) to search for duplicates"
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="1",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 1, 500KB, 1MB). Default: 1"
        )
        parser.add_argument(
            "--exclude-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded directories (space separated)"
        )
        parser.add_argument(
            "--exclude-patterns", '-x',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_patterns",
            help=EXCLUDE_PATTERNS_HELP_TEXT
        )
        parser.add_argument(
            "--no-default-excludes",
            action="store_true",
            help="Do not apply the built-in exclusions (VCS, build and system directories)"
        )
        parser.add_argument(
            "--no-recurse",
            action="store_true",
            help="Only look at files directly inside the given directories"
        )
        parser.add_argument(
            "--skip-errors",
            action="store_true",
            help="Skip unreadable directories and files instead of aborting the search"
        )

        # Actions
        parser.add_argument(
            "--keep",
            choices=KEEP_CHOICES,
            default=None,
            type=str,
            help=KEEP_HELP_TEXT
        )
        parser.add_argument(
            "--permanent",
            action="store_true",
            help="With --keep: remove files permanently instead of moving them to trash"
        )
        parser.add_argument(
            "--save",
            default=None,
            type=str,
            metavar='FILE',
            help="Write the listed paths (or the files selected by --keep) to FILE, one per line"
        )

        # Output options
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompts for --keep and allow --save to overwrite FILE"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not (args.keep or args.save):
            self.error_exit("--force can only be used with --keep or --save")

        if args.permanent and not args.keep:
            self.error_exit("--permanent can only be used with --keep")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        for root in args.roots:
            root_path = Path(root)
            if not root_path.exists():
                self.error_exit(f"Directory not found: {root}")
            if not root_path.is_dir():
                self.error_exit(f"Path is not a directory: {root}")

        if not ConvertUtils.is_valid_size_format(args.min_size):
            self.error_exit(f"Invalid size format: '{args.min_size}'")

        for excl_dir in args.excluded_dirs:
            if not Path(excl_dir).is_dir():
                self.warning(f"Excluded directory not found: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> FindParams:
        """Create FindParams from CLI arguments."""
        try:
            return FindParams.from_human_readable(
                roots=[str(Path(r).resolve()) for r in args.roots],
                min_size_str=args.min_size,
                excluded_dirs=[str(Path(d.strip()).resolve()) for d in args.excluded_dirs],
                excluded_patterns=args.excluded_patterns,
                recurse=not args.no_recurse,
                error_policy=ErrorPolicy.SKIP if args.skip_errors else ErrorPolicy.ABORT,
                use_default_exclusions=not args.no_default_excludes,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_search(self, params: FindParams) -> List[DuplicateGroup]:
        """Execute the search; any error ends the program without partial output."""
        command = FindDuplicatesCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except ExclusionPatternError as e:
            self.error_exit(str(e))
        except OSError as e:
            self.error_exit(f"Search failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary())
        self.report_skipped(stats)
        return groups

    def report_skipped(self, stats: DetectionStats) -> None:
        for path, message in stats.skipped:
            self.warning(f"Skipped {path}: {message}")

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Print duplicate groups in ranked order, then the one-line status."""
        if not self.quiet:
            now = time.time()
            for group in groups:
                title, wasted = DuplicateService.group_header(group)
                print(f"\n{title}  ({wasted})")
                for file in group.files:
                    date = ConvertUtils.timestamp_to_listing(file.modified, now)
                    print(f"   {date:>12}  {file.path}")
            if groups:
                print()
        print(duplication_status(groups))

    def execute_keep(self, groups: List[DuplicateGroup], keep: str, permanent: bool, force: bool) -> Set[str]:
        """
        Delete all but one file per group. Always shows a preview first.
        Returns the paths actually deleted.
        """
        strategy = KEEP_ALIASES[keep]
        selected = DuplicateService.select_all_but(groups, strategy)
        if not selected:
            if not self.quiet:
                print("No files to delete.")
            return set()

        freed = sum(f.size for f in DuplicateService.iter_files(groups) if f.path in selected)

        if not self.quiet:
            for group in groups:
                print()
                for file in group.files:
                    marker = "[DEL] " if file.path in selected else "[KEEP]"
                    print(f"   {marker} {file.path}")
            print()
            print(f"Summary: {len(selected)} files to delete, "
                  f"{ConvertUtils.format_size_decimal(freed)} to free ({strategy.display_name.lower()})")

        action = "delete permanently" if permanent else "move to trash"
        if not force:
            response = input(f"Are you sure you want to {action} these {len(selected)} files? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return set()

        ordered = [f.path for f in DuplicateService.iter_files(groups) if f.path in selected]
        report = FileService.delete_files(ordered, permanent=permanent)
        print(report.summary())
        return set(report.deleted)

    def save_paths(self, destination: str, paths: List[str], force: bool) -> None:
        try:
            count = FileService.save_file_list(destination, paths, overwrite=force)
        except OSError as e:
            self.error_exit(f"Cannot save file list: {e}")
        if not self.quiet:
            print(f"Saved {count} paths to {destination}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.ERROR,
            format=LOG_FORMAT,
            force=True
        )

    def run(self, argv: Optional[Sequence[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        if self.verbose:
            print(f"Searching: {', '.join(params.roots)}")

        groups = self.run_search(params)
        self.output_results(groups)

        if args.save:
            if args.keep:
                selected = DuplicateService.select_all_but(groups, KEEP_ALIASES[args.keep])
                paths = [p for p in DuplicateService.all_paths(groups) if p in selected]
            else:
                paths = DuplicateService.all_paths(groups)
            self.save_paths(args.save, paths, args.force)

        if args.keep:
            self.execute_keep(groups, args.keep, args.permanent, args.force)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        logger.exception("Unexpected error")
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
