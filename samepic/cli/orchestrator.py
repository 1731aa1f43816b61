"""
CLI workflow orchestration for samepic.

Provides the CLIOrchestrator class that parses arguments, builds the
requested strategy and runs one command.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from ..dependencies import Image, progress_bar
from ..discovery import find_image_files, load_image, stream_images
from ..errors import SamepicError
from ..manipulators import DEFAULT_MANIPULATOR
from ..rating import rate
from ..samples import DirSamples
from ..strategies import create_batch_samer, create_samer
from ..user_config import get_user_config
from ..utils.exporters import export_pairs
from .arg_parser import parse_arguments
from .reporting import print_pair, print_rating


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Logs go to stderr so that stdout carries only results.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Runs one CLI command from argument parsing through output.
    """

    def __init__(self, argv: Optional[list[str]] = None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.args: Optional[argparse.Namespace] = None
        self.logger: Optional[logging.Logger] = None
        self.config = get_user_config()

    def run(self) -> int:
        """
        Execute the requested command.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)
        Image.MAX_IMAGE_PIXELS = self.config.max_image_pixels

        commands = {
            'dir': self._dir_command,
            'rate': self._rate_command,
            'manipulate': self._manipulate_command,
            'config': self._config_command,
        }
        try:
            return commands[self.args.command]()
        except (SamepicError, OSError, ValueError) as e:
            self.logger.error(str(e))
            return 1

    def _strategy_options(self) -> dict:
        """Collect strategy options from the parsed arguments."""
        args = self.args
        threshold = args.threshold if args.threshold is not None else self.config.default_threshold
        return {
            'name': args.samer or self.config.default_samer,
            'threshold': threshold,
            'scale_size': args.scale_size,
            'bin_count': args.bin_count,
            'axis': args.axis,
            'min_overlap': args.min_overlap,
            'vector_size': args.vector_size,
        }

    @staticmethod
    def _track_progress(images, pbar):
        """Advance the progress bar as each image enters the matcher."""
        for entry in images:
            yield entry
            if pbar is not None:
                pbar.update(1)

    def _dir_command(self) -> int:
        """Stream near-duplicate pairs found in a directory."""
        samer = create_batch_samer(**self._strategy_options())

        if not self.args.directory.is_dir():
            self.logger.error(f"Directory not found: {self.args.directory}")
            return 1

        image_files = find_image_files(self.args.directory, recursive=self.args.recursive)
        self.logger.info(f"Found {len(image_files):,} image files")

        pbar = progress_bar(
            total=len(image_files),
            desc="Comparing",
            unit="img",
            enabled=not self.args.no_progress,
        )
        pairs = []
        try:
            images = self._track_progress(stream_images(image_files), pbar)
            for pair in samer.same_batch(images, queue_size=self.config.batch_queue_size):
                print_pair(pair)
                pairs.append(pair)
        finally:
            if pbar is not None:
                pbar.close()
        self.logger.info(f"Found {len(pairs):,} near-duplicate pairs using {samer.name}")

        if self.args.export:
            export_pairs(pairs, self.args.export, self.args.export_format)
            self.logger.info(f"Pairs exported to: {self.args.export}")
        return 0

    def _rate_command(self) -> int:
        """Rate a strategy against a directory of samples."""
        samer = create_samer(**self._strategy_options())
        samples = DirSamples(self.args.directory)
        count = self.args.count if self.args.count is not None else self.config.rate_count

        self.logger.info(f"Rating {samer.name} on {len(samples.image_paths):,} samples...")
        result = rate(
            samer,
            samples,
            DEFAULT_MANIPULATOR,
            count,
            show_progress=not self.args.no_progress,
        )
        print_rating(result)
        return 0

    def _manipulate_command(self) -> int:
        """Write a manipulated copy of an image."""
        img = load_image(self.args.input)
        manipulated = DEFAULT_MANIPULATOR.manipulate(img)
        manipulated.save(self.args.output, format='PNG')
        self.logger.info(
            f"Wrote {manipulated.width}x{manipulated.height} manipulation to {self.args.output}"
        )
        return 0

    def _config_command(self) -> int:
        """Show or create the user configuration file."""
        config = self.config
        if self.args.init:
            if not config.create_example_config():
                return 1
            print("Created example configuration file at:")
            print(f"  {config.config_file_path}")
            return 0

        print(f"Configuration file: {config.config_file_path}")
        if config.config_file_path.exists():
            print("Status: found")
        else:
            print("Status: not found (using defaults)")
            print("\nRun 'samepic config --init' to create one.")

        print("\nCurrent settings:")
        print(f"  default_samer: {config.default_samer}")
        print(f"  default_threshold: {config.default_threshold}")
        print(f"  rate_count: {config.rate_count}")
        print(f"  batch_queue_size: {config.batch_queue_size}")
        print(f"  max_image_pixels: {config.max_image_pixels:,}")
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
