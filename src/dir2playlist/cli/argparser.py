"""Command-line argument parsing for dir2playlist.

This module defines the command-line interface for dir2playlist,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dir2playlist import __version__
from dir2playlist.dir2playlist import DEFAULT_TITLE
from dir2playlist.exceptions import ConfigurationError
from dir2playlist.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling pattern exclusion rules.

    The returned action updates the provided exclusion rules object as arguments are
    processed, which preserves the order of -e/--exclude files and -i/--ignore
    patterns exactly as they appear on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            # Keep the raw values on the namespace as well
            collected = getattr(namespace, self.dest, None) or []
            collected.append(values)
            setattr(namespace, self.dest, collected)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The pattern exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with dir2playlist's options.
    """
    description = """
    dir2playlist: build a browsable video playlist from media library directories.

    Every root directory is scanned recursively for .mp4 and .mkv files. The result is
    a single XSPF playlist whose VLC extension mirrors the directory hierarchy, so a
    player can browse the playlist the same way it would browse the filesystem.

    Directories without any video beneath them are left out, files reachable from
    several roots are listed once, and entries are ordered by name at every level so
    that an unchanged library always yields the same playlist.
    """

    epilog = """
    Examples:
      # Scan one library
      dir2playlist -r /srv/media/movies -o movies.xspf

      # Several roots, kept in the given order
      dir2playlist -r /srv/media/movies -r /srv/media/shows -o library.xspf

      # Leave out a directory and everything beneath it
      dir2playlist -r /srv/media -s /srv/media/private -o library.xspf

      # Leave out files by gitignore-style pattern
      dir2playlist -r /srv/media -i "*.sample.mkv" -i "Extras/" -o library.xspf

      # Preview the tree that would be written
      dir2playlist -r /srv/media --tree

      # Stop on the first unreadable directory
      dir2playlist -r /srv/media -P fail -o library.xspf
    """

    parser = argparse.ArgumentParser(
        prog="dir2playlist",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2playlist {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directories",
        type=Path,
        nargs="*",
        metavar="ROOT",
        help="Root directories to scan. Appended after any -r/--root roots.",
    )
    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        action="append",
        default=[],
        metavar="DIR",
        help=(
            "Starting point for the scanner; glob patterns are not supported. Each root is scanned "
            "recursively for mkv and mp4 files (can be specified multiple times)."
        ),
    )
    parser.add_argument(
        "-s",
        "--skip",
        type=Path,
        action="append",
        default=[],
        metavar="PATH",
        help=(
            "File or directory to leave out together with everything beneath it; glob patterns are "
            "not supported (can be specified multiple times)."
        ),
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a file of gitignore-style patterns to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern matched against paths relative to each root, such as "
            '"*.sample.mkv" or "Extras/" (can be specified multiple times).'
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="File to write the playlist to. If not specified, the playlist is written to stdout.",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help=f'Playlist title (default: "{DEFAULT_TITLE}").',
    )
    parser.add_argument(
        "-t",
        "--tree",
        action="store_true",
        help="Write a text rendering of the directory tree instead of the playlist.",
    )
    parser.add_argument(
        "-S",
        "--summary",
        action="store_true",
        help="Print group, track and warning counts to stderr.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help="How to handle unreadable directories (default: warn).",
    )

    return parser


def collect_roots(args: argparse.Namespace) -> List[Path]:
    """Return the roots from -r/--root followed by the positional roots."""
    return list(args.root) + list(args.directories)


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ConfigurationError: If no root directory was given.
        ValueError: If any other argument fails validation.
    """
    if not collect_roots(args):
        raise ConfigurationError("At least one root directory is required (use -r/--root or a positional ROOT)")
    if args.tree and args.output and args.output.suffix.lower() == ".xspf":
        raise ValueError("--tree writes plain text; refusing to write it to an .xspf file")
