"""
Sample sources for the rating harness.

A sample source hands out random images, either one at a time or as pairs of
different images.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from PIL import Image

from .discovery import load_image
from .errors import ImageLoadError, SampleError

logger = logging.getLogger(__name__)


class Samples(ABC):
    """Any source of image samples."""

    @abstractmethod
    def random(self) -> Image.Image:
        """
        Randomly select a sample image.

        Raises:
            SampleError: If no image can be produced
        """

    @abstractmethod
    def random_pair(self) -> tuple[Image.Image, Image.Image]:
        """
        Randomly select two different sample images (without replacement).

        Raises:
            SampleError: If two different images cannot be produced
        """


class DirSamples(Samples):
    """
    Loads image samples from a directory of image files.

    Files that fail to decode are removed from the pool and another file is
    tried, so a few stray non-image files do not abort a rating run.
    """

    def __init__(self, directory: str | Path, rng: Optional[random.Random] = None):
        """
        Create a sample pool from a directory listing.

        Args:
            directory: Directory whose regular files are the samples
            rng: Random number generator (default: a fresh random.Random)

        Raises:
            SampleError: If the directory cannot be listed
        """
        self.directory = Path(directory)
        self._rng = rng or random.Random()
        try:
            self.image_paths = sorted(str(p) for p in self.directory.iterdir() if p.is_file())
        except OSError as e:
            raise SampleError(f"cannot list {self.directory}: {e}") from e

    def _discard(self, idx: int) -> None:
        # Swap-remove; pool order does not matter
        self.image_paths[idx] = self.image_paths[-1]
        self.image_paths.pop()

    def random(self) -> Image.Image:
        while self.image_paths:
            idx = self._rng.randrange(len(self.image_paths))
            try:
                return load_image(self.image_paths[idx])
            except ImageLoadError as e:
                logger.debug(f"Dropping sample: {e}")
                self._discard(idx)
        raise SampleError("no usable images")

    def random_pair(self) -> tuple[Image.Image, Image.Image]:
        pair: list[Image.Image] = []
        last_path = None
        while len(self.image_paths) > 1 and len(pair) < 2:
            idx = self._rng.randrange(len(self.image_paths))
            path = self.image_paths[idx]
            if path == last_path:
                continue
            try:
                pair.append(load_image(path))
                last_path = path
            except ImageLoadError as e:
                logger.debug(f"Dropping sample: {e}")
                self._discard(idx)
        if len(pair) == 2:
            return pair[0], pair[1]
        raise SampleError("no usable pair")


__all__ = ['Samples', 'DirSamples']
