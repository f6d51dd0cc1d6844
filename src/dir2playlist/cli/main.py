"""Command-line interface for dir2playlist.

This module provides the command-line entry point. It parses arguments, builds the
playlist, reports traversal warnings, and writes the result either to stdout or
atomically to a file.

Exit Codes:
    0: Successful completion
    1: Runtime or serialization error
    2: Command-line syntax error or invalid root configuration
    126: Permission denied (with -P fail)
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe on stdout

Example:
    # Scan two roots and write the playlist
    $ dir2playlist -r /srv/media/movies -r /srv/media/shows -o library.xspf

    # Display version information
    $ dir2playlist --version
"""

import os
import sys
from collections.abc import Mapping

from dir2playlist.cli.argparser import collect_roots, create_parser, validate_args
from dir2playlist.cli.safe_writer import SafeWriter
from dir2playlist.dir2playlist import Dir2Playlist
from dir2playlist.exceptions import ConfigurationError, PlaylistSerializationError
from dir2playlist.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dir2playlist.file_system_tree.permission_action import PermissionAction


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing the group, track and warning counts.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join(
        [
            f"Groups: {counts['groups']}",
            f"Tracks: {counts['tracks']}",
            f"Warnings: {counts['warnings']}",
        ]
    )


def _silence_stdout() -> None:
    # Python flushes stdout at exit; point it at the null device so a closed pipe stays quiet
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main() -> None:
    """Main entry point for the dir2playlist command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime or serialization error
        2: Command-line syntax error or invalid root configuration
        126: Permission denied (with -P fail)
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe on stdout
    """
    try:
        # Populated by -e/--exclude and -i/--ignore while parsing
        exclusion_rules = GitIgnoreExclusionRules()

        parser = create_parser(exclusion_rules)
        args = parser.parse_args()

        validate_args(args)

        # Warnings are always recorded; the CLI decides whether to show them
        perm_action = {
            "ignore": PermissionAction.IGNORE,
            "warn": PermissionAction.IGNORE,
            "fail": PermissionAction.RAISE,
        }[args.permission_action]

        analyzer = Dir2Playlist(
            collect_roots(args),
            skip_paths=args.skip,
            exclusion_rules=exclusion_rules if exclusion_rules.has_rules() else None,
            title=args.title,
            permission_action=perm_action,
        )

        # Build the whole document before opening the output, so failures leave nothing behind
        if args.tree:
            document = "".join(analyzer.stream_tree())
        else:
            document = analyzer.render()

        if args.permission_action == "warn":
            for warning in analyzer.warnings:
                print(f"Warning: {warning}", file=sys.stderr)

        output_file = args.output if args.output else sys.stdout.fileno()
        try:
            with SafeWriter(output_file) as safe_writer:
                safe_writer.write(document)
        except BrokenPipeError:
            raise
        except OSError as e:
            # Output failures are runtime errors, not the traversal permission failure (126)
            print(f"Error: Cannot write output: {e}", file=sys.stderr)
            sys.exit(1)

        if args.summary:
            counts = {
                "groups": analyzer.group_count,
                "tracks": analyzer.track_count,
                "warnings": len(analyzer.warnings),
            }
            print(format_counts(counts), file=sys.stderr)

        if analyzer.track_count == 0:
            print("Warning: No video files found. The playlist is empty.", file=sys.stderr)

    except ConfigurationError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(2)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except PlaylistSerializationError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("No playlist was written.", file=sys.stderr)
        sys.exit(1)
    except BrokenPipeError:
        _silence_stdout()
        sys.exit(141)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
