"""
Realistic image manipulations used to synthesize positive sample pairs.

A manipulation may be random, doing something different on each call.
Every manipulator takes an optional ``random.Random`` so that tests and
experiments can be made reproducible.
"""

from __future__ import annotations

import io
import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from PIL import Image

from .config import (
    DEFAULT_MANIPULATION_PROBABILITY,
    DEFAULT_MAX_SCALE,
    DEFAULT_MIN_MAJOR_KEEP,
    DEFAULT_MIN_MINOR_KEEP,
    DEFAULT_MIN_SCALE,
)
from .imaging import rgb_image

# Resampling filters a rescale may pick from
DEFAULT_INTERPOLATIONS = (
    Image.Resampling.NEAREST,
    Image.Resampling.BILINEAR,
    Image.Resampling.BICUBIC,
    Image.Resampling.LANCZOS,
    Image.Resampling.BOX,
    Image.Resampling.HAMMING,
)


class Manipulator(ABC):
    """Applies a realistic manipulation (crop, scale, compression) to an image."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @abstractmethod
    def manipulate(self, img: Image.Image) -> Image.Image:
        """Return a manipulated copy of the image; the input is not modified."""


class CompressJPEG(Manipulator):
    """
    Compresses and then decompresses images with JPEG.

    Quality ranges from 1 (lowest) to 100 (best). A bound left at 0 uses
    the widest setting (1 or 100).
    """

    def __init__(self, min_quality: int = 0, max_quality: int = 0, rng: Optional[random.Random] = None):
        super().__init__(rng)
        self.min_quality = min_quality
        self.max_quality = max_quality

    def manipulate(self, img: Image.Image) -> Image.Image:
        quality = self.rng.randint(self.min_quality or 1, self.max_quality or 100)
        buf = io.BytesIO()
        rgb_image(img).save(buf, format='JPEG', quality=quality)
        buf.seek(0)
        with Image.open(buf) as compressed:
            compressed.load()
            return compressed.copy()


class Scale(Manipulator):
    """
    Resizes images by a random ratio, keeping the aspect ratio.

    Attributes:
        min_scale, max_scale: Range of new size divided by old size
        interpolations: Resampling filters to choose from
    """

    def __init__(
        self,
        min_scale: float = DEFAULT_MIN_SCALE,
        max_scale: float = DEFAULT_MAX_SCALE,
        interpolations: Optional[Sequence[int]] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.interpolations = tuple(interpolations or DEFAULT_INTERPOLATIONS)

    def manipulate(self, img: Image.Image) -> Image.Image:
        interpolation = self.rng.choice(self.interpolations)
        scale = self.rng.uniform(self.min_scale, self.max_scale)
        new_width = max(1, int(img.width * scale + 0.5))
        new_height = max(1, int(img.height * new_width / img.width + 0.5))
        return img.resize((new_width, new_height), interpolation)


class Crop(Manipulator):
    """
    Crops out a random region of an image.

    The major axis is the longer one (x for landscape images). The keep
    fractions bound how much of each axis must survive: with
    min_minor_keep=0.8, a 1500x1000 image is never cropped below 800
    pixels high. Square images pick their major axis at random.
    """

    def __init__(
        self,
        min_major_keep: float = DEFAULT_MIN_MAJOR_KEEP,
        min_minor_keep: float = DEFAULT_MIN_MINOR_KEEP,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self.min_major_keep = min_major_keep
        self.min_minor_keep = min_minor_keep

    def manipulate(self, img: Image.Image) -> Image.Image:
        minor_size = min(img.width, img.height)
        major_size = max(img.width, img.height)

        minor_keep = self.rng.uniform(self.min_minor_keep, 1.0)
        major_keep = self.rng.uniform(self.min_major_keep, 1.0)

        new_minor = max(1, int(minor_size * minor_keep + 0.5))
        new_major = max(1, int(major_size * major_keep + 0.5))
        minor_offset = self.rng.randint(0, minor_size - new_minor)
        major_offset = self.rng.randint(0, major_size - new_major)

        if img.width == img.height:
            x_major = self.rng.random() < 0.5
        else:
            x_major = img.width > img.height

        if x_major:
            box = (major_offset, minor_offset, major_offset + new_major, minor_offset + new_minor)
        else:
            box = (minor_offset, major_offset, minor_offset + new_minor, major_offset + new_major)
        return img.crop(box)


class AggregateManipulator(Manipulator):
    """
    Probabilistically applies a list of manipulators in order.

    Attributes:
        manipulators: Manipulators, applied in list order
        probabilities: Chance of applying the manipulator at the same index
    """

    def __init__(
        self,
        manipulators: Sequence[Manipulator],
        probabilities: Sequence[float],
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        if len(manipulators) != len(probabilities):
            raise ValueError(
                f"{len(manipulators)} manipulators but {len(probabilities)} probabilities"
            )
        self.manipulators = list(manipulators)
        self.probabilities = list(probabilities)

    def manipulate(self, img: Image.Image) -> Image.Image:
        for manipulator, probability in zip(self.manipulators, self.probabilities):
            if self.rng.random() <= probability:
                img = manipulator.manipulate(img)
        return img


def default_manipulator(rng: Optional[random.Random] = None) -> AggregateManipulator:
    """
    Build the standard manipulator: rescale, crop and JPEG-compress, each
    applied with probability 0.5.
    """
    rng = rng or random.Random()
    return AggregateManipulator(
        manipulators=[
            Scale(DEFAULT_MIN_SCALE, DEFAULT_MAX_SCALE, rng=rng),
            Crop(DEFAULT_MIN_MAJOR_KEEP, DEFAULT_MIN_MINOR_KEEP, rng=rng),
            CompressJPEG(rng=rng),
        ],
        probabilities=[DEFAULT_MANIPULATION_PROBABILITY] * 3,
        rng=rng,
    )


DEFAULT_MANIPULATOR = default_manipulator()


__all__ = [
    'Manipulator',
    'CompressJPEG',
    'Scale',
    'Crop',
    'AggregateManipulator',
    'default_manipulator',
    'DEFAULT_MANIPULATOR',
    'DEFAULT_INTERPOLATIONS',
]
