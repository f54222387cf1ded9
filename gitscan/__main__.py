"""Main entry point for gitscan CLI."""

from dotenv import load_dotenv
load_dotenv()

import sys
import argparse
from typing import List, Optional

from .config import Config
from .core.logger import setup_logging
from .core.scanner import Scanner
from .utils.git import GitProber


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='gitscan',
        description='Report the synchronization status of every git repository under a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Status codes:
  D   working tree has uncommitted or untracked changes
   E  remote could not be updated
   *  diverged from upstream
   +  ahead of upstream
   -  behind upstream (after an attempted fast-forward)
  ??  status could not be determined

Examples:
  # Report repositories needing attention under the current directory
  gitscan

  # Report every repository under ~/src with 16 workers
  gitscan ~/src --all --par 16
        """
    )

    parser.add_argument(
        'dir',
        nargs='?',
        default='.',
        help='Base directory (default: current directory)'
    )
    parser.add_argument(
        '--all', '-a',
        action='store_true',
        dest='show_all',
        help='Show all checked repositories, even the clean ones'
    )
    parser.add_argument(
        '--pull',
        action='store_true',
        help='Pull down remote changes if behind (always enabled)'
    )
    parser.add_argument(
        '--par',
        type=int,
        metavar='N',
        help='Parallel instances of git status to run (default: CPU count)'
    )

    log_group = parser.add_argument_group('logging')
    log_group.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Log progress to stderr (-vv for debug output)'
    )
    log_group.add_argument(
        '--log-file',
        metavar='PATH',
        help='Also write log output to a file'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_and_args(
            base_dir=args.dir,
            show_all=args.show_all,
            max_workers=args.par,
            verbosity=args.verbose,
            log_file=args.log_file
        )
    except ValueError as e:
        logger = setup_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        logger = setup_logging(level=config.log_level, log_file=config.log_file)
    except OSError as e:
        logger = setup_logging()
        logger.error(f"Cannot open log file: {e}")
        return 1

    logger.info(f"Base directory: {config.base_dir}")
    logger.info(f"Git executable: {config.git_binary}")

    scanner = Scanner(
        base_dir=config.base_dir,
        max_workers=config.workers,
        show_all=config.show_all,
        prober=GitProber(git_binary=config.git_binary)
    )

    try:
        scanner.run()
    except OSError as e:
        logger.error(f"Failed to scan {config.base_dir}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Scan cancelled by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
