"""Subcommand dispatcher for reelcompose.

Usage:
    reelcompose timeline --manifest composition.yaml [--json | --validate]
    reelcompose preview  --manifest composition.yaml --output preview.mp4
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="reelcompose",
        description="Timeline composition for narrated section videos.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("timeline", help="Compute the frame schedule of a composition")
    subparsers.add_parser("preview", help="Render the schedule as a slate preview video")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "timeline":
        from .timeline_cli import main as timeline_main
        timeline_main(remaining)
    elif parsed.command == "preview":
        from .preview_cli import main as preview_main
        preview_main(remaining)


if __name__ == "__main__":
    main()
