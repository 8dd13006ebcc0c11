"""
Command-line interface for miro-export.
"""
import argparse
import asyncio
import os
import sys
from typing import List, Optional

from miro_export.core.config import ConfigError, ConfigurationManager, get_config_manager
from miro_export.core.exceptions import MiroExportError
from miro_export.core.logger import get_logger, setup_logging
from miro_export.core.manager import EXPORT_FORMATS, ExportManager

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure argument parser

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='miro-export',
        description='Export a Miro board (or some of its frames) as SVG or JSON',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Entire board as SVG on stdout
  miro-export -b uXjVN0abcde= -t $MIRO_TOKEN > board.svg

  # Two frames into one file
  miro-export -b uXjVN0abcde= -f "Frame 1" "Frame 2" -o frames.svg

  # One JSON file per frame
  miro-export -b uXjVN0abcde= -f "Frame 1" "Frame 2" -e json -o "out/{frameName}.json"
        """
    )

    parser.add_argument(
        '-t', '--token',
        type=str,
        default=os.environ.get('MIRO_TOKEN'),
        help='Miro token (default: $MIRO_TOKEN; omit for boards open to anonymous users)'
    )

    parser.add_argument(
        '-b', '--board-id',
        type=str,
        required=True,
        help='The board ID'
    )

    parser.add_argument(
        '-f', '--frame-names',
        type=str,
        nargs='+',
        metavar='FRAME_NAME',
        help='The frame name(s), leave empty to export entire board'
    )

    parser.add_argument(
        '-o', '--output-file',
        type=str,
        help='A file to output the export to (stdout if not supplied); '
             '"{frameName}" in the name writes one file per frame'
    )

    parser.add_argument(
        '-e', '--export-format',
        type=str,
        default='svg',
        choices=EXPORT_FORMATS,
        help="'svg' or 'json' (default: 'svg')"
    )

    parser.add_argument(
        '--board-load-timeout',
        type=int,
        metavar='MS',
        help='Milliseconds to wait for the board to load (default: from configuration, 15000)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from configuration)'
    )

    parser.add_argument(
        '--env',
        type=str,
        help='Configuration environment to load (default: $MIRO_EXPORT_ENV or development)'
    )

    return parser


async def run(args: argparse.Namespace, config: ConfigurationManager) -> int:
    manager = ExportManager(config=config)
    result = await manager.export(
        board_id=args.board_id,
        token=args.token,
        frame_names=args.frame_names,
        output_file=args.output_file,
        export_format=args.export_format,
        board_load_timeout_ms=args.board_load_timeout,
    )
    if result.output is not None:
        sys.stdout.write(result.output)
        sys.stdout.flush()
    for path in result.written_paths:
        logger.info(f"Saved {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config_manager(args.env)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config, level=args.log_level, force=True)

    try:
        return asyncio.run(run(args, config))
    except MiroExportError as e:
        logger.debug("Export failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
