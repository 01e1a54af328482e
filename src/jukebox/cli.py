"""
Jukebox CLI - Entry point

Parses command line options and starts interactive mode.
"""

import argparse
import sys

from jukebox import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jukebox",
        description="Jukebox - terminal music player driving mpv",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Environment: SONGS_DIR sets the songs directory, "
        "JUKEBOX_HOME the data directory (session, playlists, log).",
    )
    parser.add_argument(
        "--songs-dir",
        metavar="DIR",
        help="Directory to scan for tracks (overrides SONGS_DIR and config)",
    )
    parser.add_argument(
        "--tmux",
        action="store_true",
        help="Draw in the main screen instead of the alternate screen",
    )
    parser.add_argument(
        "--no-session",
        action="store_true",
        help="Neither restore nor save the session",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the jukebox command."""
    args = build_parser().parse_args(argv)

    # Delegate to main interactive mode
    from .main import interactive_mode

    sys.exit(
        interactive_mode(
            songs_dir=args.songs_dir,
            tmux=args.tmux,
            no_session=args.no_session,
            debug=args.debug,
        )
    )


if __name__ == "__main__":
    main()
