#!/usr/bin/env python3
"""
Main entry point for Kitsu Watch: mark a downloaded episode as watched
"""

import os
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from kitsu_watch.errors import KitsuWatchError
from kitsu_watch.watch_manager import WatchManager

# Load environment variables
load_dotenv()


def setup_logging(debug: bool = False) -> None:
    """Setup logging configuration with clean output"""
    log_level = logging.DEBUG if debug else logging.INFO

    # Create logs directory
    Path("logs").mkdir(exist_ok=True)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('logs/kitsu_watch.log'),
            logging.StreamHandler()
        ]
    )

    # Request-level logging is noise even in debug mode
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    if debug:
        logging.getLogger('kitsu_watch').setLevel(logging.DEBUG)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Sync a downloaded episode to your Kitsu watch progress and move it to watched/'
    )

    parser.add_argument('name', nargs='?',
                        help='Part of the episode file name, e.g. "frieren"')
    parser.add_argument('episode', nargs='?',
                        help='Episode number in the file name')
    parser.add_argument('forced', nargs='?', default='',
                        help='Progress to set instead of the file episode number')
    parser.add_argument('--dir', default=os.getcwd(),
                        help='Directory containing the episode files (default: current directory)')
    parser.add_argument('--refresh-cache', action='store_true',
                        help='Reload the currently watching list from Kitsu before matching')
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what would be updated without making changes')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_arguments(argv)

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    if not args.refresh_cache and not (args.name and args.episode):
        logger.error("Incorrect Argument Syntax: NAME and EPISODE are required")
        return 1

    config = {
        'config_path': os.getenv('KITSU_WATCH_CONFIG'),
        'kitsu_username': os.getenv('KITSU_USERNAME'),
        'kitsu_password': os.getenv('KITSU_PASSWORD'),
        'dry_run': args.dry_run,
    }

    try:
        watch_manager = WatchManager(**config)

        if args.refresh_cache:
            watch_manager.refresh_cache()

        if args.name and args.episode:
            watch_manager.watch(args.name, args.episode, args.forced, args.dir)

        return 0

    except KitsuWatchError as e:
        for line in e.diagnostics():
            logger.error(line)
        return 1
    except KeyboardInterrupt:
        logger.info("⏹️ Process interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"❌ Unhandled error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
