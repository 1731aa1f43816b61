"""
Argument parsing for the samepic command-line interface.

Provides functions to create and configure the argument parser. Strategy
options are shared by the commands that compare images.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..strategies import available_samers


def _strategy_options() -> argparse.ArgumentParser:
    """Parent parser holding the strategy selection flags."""
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group('strategy options')

    group.add_argument(
        '-s', '--samer',
        choices=available_samers(),
        default=None,
        help='Comparison strategy. Default: from user config (avghash)'
    )
    group.add_argument(
        '-t', '--threshold',
        type=float,
        default=None,
        help='Match threshold (0 = strategy default)'
    )
    group.add_argument(
        '--scale-size',
        type=int,
        default=None,
        help='avghash: hash grid size (default 8)'
    )
    group.add_argument(
        '--bin-count',
        type=int,
        default=None,
        help='colorprof: bins per channel (default 8)'
    )
    group.add_argument(
        '--axis',
        choices=['vertical', 'horizontal'],
        default=None,
        help='squashcomp: axis to squash (default vertical)'
    )
    group.add_argument(
        '--min-overlap',
        type=float,
        default=None,
        help='squashcomp: minimum overlap fraction (default 0.7)'
    )
    group.add_argument(
        '--vector-size',
        type=int,
        default=None,
        help='squashcomp: squashed line length (default 150)'
    )
    return parent


def _output_options() -> argparse.ArgumentParser:
    """Parent parser holding the logging flag."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )
    return parent


def _progress_options() -> argparse.ArgumentParser:
    """Parent parser for commands that show a progress bar."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )
    return parent


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    strategy = _strategy_options()
    output = _output_options()
    progress = _progress_options()

    parser = argparse.ArgumentParser(
        prog='samepic',
        description='Detect images that show the same subject',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s dir /path/to/photos
      Print pairs of near-duplicate images (two lines per pair)

  %(prog)s dir /path/to/photos --samer squashcomp --export pairs.csv --export-format csv
      Crop-tolerant matching, results also written to CSV

  %(prog)s rate /path/to/samples --samer colorprof --count 200
      Measure how often a strategy is right on manipulated samples

  %(prog)s manipulate photo.jpg manipulated.png
      Write a randomly cropped/scaled/compressed copy of an image
        """
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    dir_parser = subparsers.add_parser(
        'dir',
        parents=[strategy, output, progress],
        help='Find near-duplicate pairs in a directory',
    )
    dir_parser.add_argument('directory', type=Path, help='Directory of images')
    dir_parser.add_argument(
        '-r', '--recursive',
        action='store_true',
        help='Also scan subdirectories'
    )
    dir_parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export pairs to file'
    )
    dir_parser.add_argument(
        '--export-format',
        choices=['txt', 'csv'],
        default='txt',
        help='Export format. Default: txt'
    )

    rate_parser = subparsers.add_parser(
        'rate',
        parents=[strategy, output, progress],
        help='Rate a strategy on a directory of samples',
    )
    rate_parser.add_argument('directory', type=Path, help='Directory of sample images')
    rate_parser.add_argument(
        '-n', '--count',
        type=int,
        default=None,
        help='Number of trials. Default: from user config (100)'
    )

    manipulate_parser = subparsers.add_parser(
        'manipulate',
        parents=[output],
        help='Write a manipulated copy of an image',
    )
    manipulate_parser.add_argument('input', type=Path, help='Original image')
    manipulate_parser.add_argument('output', type=Path, help='Output PNG path')

    config_parser = subparsers.add_parser(
        'config',
        parents=[output],
        help='Show or create the user configuration',
    )
    config_parser.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example config file'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['dir', '/path/to/photos', '--samer', 'colorprof'])
        >>> args.command, args.samer
        ('dir', 'colorprof')
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
