"""
Squash comparison.

Images are "squashed" into one-dimensional lines by scaling one axis down to
a single pixel, and the lines are compared by correlation. To tolerate
cropping and rescaling, the secondary line is tried at every length between
the minimum overlap and the full vector size, and slid along the main line
at every offset that keeps the required overlap.

Cost: for vector size V, one directional check squashes the secondary image
at up to V * (1 - min_overlap) sizes and correlates O(V) offsets per size,
each correlation O(V). Raising V improves crop tolerance and precision at a
quadratic price in runtime.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from PIL import Image

from ..config import (
    DEFAULT_SQUASH_COMP_MIN_OVERLAP,
    DEFAULT_SQUASH_COMP_THRESHOLD,
    DEFAULT_SQUASH_COMP_VECTOR_SIZE,
)
from ..dependencies import np
from ..imaging import cosine_similarity, float_channels
from .base import BatchSamer


class SquashAxis(enum.Enum):
    """Axis collapsed to a single pixel."""
    VERTICAL = 0    # squash along y; the line runs left to right
    HORIZONTAL = 1  # squash along x; the line runs top to bottom

    @classmethod
    def parse(cls, value) -> 'SquashAxis':
        """Accept an enum member or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown squash axis: {value!r}") from None


class SquashProfile:
    """
    Squashed lines of one image, computed on demand for any length.

    The squashed axis is collapsed once at construction, leaving one
    full-length float line per color band; bilinear resampling is separable,
    so shrinking that line later gives the same values as squashing the
    whole image. Lines are memoized per length, so an image compared many
    times (as in batch matching) is resampled at most once per length.
    """

    def __init__(self, img: Image.Image, axis: SquashAxis = SquashAxis.VERTICAL):
        self.axis = axis
        self._lines = [self._collapse(band) for band in float_channels(img)]
        self._vectors: dict[int, np.ndarray] = {}

    def _collapse(self, band: Image.Image) -> Image.Image:
        if self.axis is SquashAxis.HORIZONTAL:
            return band.resize((1, band.height), Image.Resampling.BILINEAR)
        return band.resize((band.width, 1), Image.Resampling.BILINEAR)

    @property
    def length(self) -> int:
        """Number of samples in the full-resolution line."""
        line = self._lines[0]
        return line.height if self.axis is SquashAxis.HORIZONTAL else line.width

    @property
    def nbytes(self) -> int:
        """Bytes held by the full-resolution lines."""
        return sum(len(line.tobytes()) for line in self._lines)

    def vector(self, n: int) -> np.ndarray:
        """
        Squash the image to a line of n samples.

        Returns:
            Read-only vector of length 3n holding R, G, B for each sample,
            normalized to [0, 1]
        """
        vec = self._vectors.get(n)
        if vec is None:
            size = (1, n) if self.axis is SquashAxis.HORIZONTAL else (n, 1)
            samples = [
                np.asarray(band.resize(size, Image.Resampling.BILINEAR), dtype=np.float64).ravel()
                for band in self._lines
            ]
            vec = (np.stack(samples, axis=-1) / 255.0).ravel()
            vec.flags.writeable = False
            self._vectors[n] = vec
        return vec


@dataclass(frozen=True)
class SquashComp(BatchSamer):
    """
    Compares images by correlating squashed lines at many scales and offsets.

    Attributes:
        axis: Axis that is squashed. Default VERTICAL.
        min_overlap: Fraction of the main line that the secondary line must
            cover. For example 0.8 allows one image to lose 20% of its
            unsquashed axis to cropping. 0 means the default (0.7).
        vector_size: Length (in samples) of the main line. Rescaled copies
            still match because both are squashed to this length. 0 means
            the default (150).
        threshold: Minimum correlation for a match. 0 means the default
            (0.995).
    """
    axis: SquashAxis = SquashAxis.VERTICAL
    min_overlap: float = 0.0
    vector_size: int = 0
    threshold: float = 0.0

    name = "squashcomp"

    @property
    def effective_min_overlap(self) -> float:
        return self.min_overlap or DEFAULT_SQUASH_COMP_MIN_OVERLAP

    @property
    def effective_vector_size(self) -> int:
        return self.vector_size or DEFAULT_SQUASH_COMP_VECTOR_SIZE

    @property
    def effective_threshold(self) -> float:
        return self.threshold or DEFAULT_SQUASH_COMP_THRESHOLD

    def squash(self, img: Image.Image, n: int) -> np.ndarray:
        """Squash an image to a vector of 3n channel values."""
        return SquashProfile(img, self.axis).vector(n)

    def vector_match(self, main: np.ndarray, secondary: np.ndarray, offset: int) -> bool:
        """
        Correlate the secondary line placed at an offset along the main line.

        Args:
            main: Main line (3 values per sample)
            secondary: Secondary line (3 values per sample)
            offset: Sample position of the secondary line's start on the
                main line; negative values hang it off the front

        Returns:
            True if the overlapping parts correlate at or above the threshold
        """
        if offset < 0:
            secondary = secondary[-offset * 3:]
        else:
            main = main[offset * 3:]
        length = min(len(main), len(secondary))
        if length == 0:
            return False
        return cosine_similarity(main[:length], secondary[:length]) >= self.effective_threshold

    def asymmetrical_same(self, main: Image.Image, secondary: Image.Image) -> bool:
        """
        Keep the main image at vector_size and scale and slide the other.

        Only the secondary image is shrunk, so the result depends on which
        image is main; ``same`` tries both ways.
        """
        return self._asymmetrical_match(
            SquashProfile(main, self.axis),
            SquashProfile(secondary, self.axis),
        )

    def _asymmetrical_match(self, main: SquashProfile, secondary: SquashProfile) -> bool:
        vector_size = self.effective_vector_size
        main_vec = main.vector(vector_size)
        min_size = int(math.ceil(vector_size * self.effective_min_overlap))

        for size in range(min_size, vector_size + 1):
            secondary_vec = secondary.vector(size)
            # How far the secondary line may hang off either end while still
            # covering min_size samples of the main line
            allowed_miss = size - min_size
            for offset in range(-allowed_miss, vector_size - size + allowed_miss + 1):
                if self.vector_match(main_vec, secondary_vec, offset):
                    return True
        return False

    def fingerprint(self, img: Image.Image) -> SquashProfile:
        return SquashProfile(img, self.axis)

    def match(self, fp1: SquashProfile, fp2: SquashProfile) -> bool:
        return self._asymmetrical_match(fp1, fp2) or self._asymmetrical_match(fp2, fp1)


__all__ = ['SquashAxis', 'SquashProfile', 'SquashComp']
