"""
Color profile comparison.

Builds a red, green and blue histogram for each image and compares the
concatenated histograms by cosine similarity. The comparison ignores the
spatial layout entirely, so it survives cropping and mirroring, but it is
fooled by unrelated images with similar palettes.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from ..config import (
    DEFAULT_COLOR_PROF_BIN_COUNT,
    DEFAULT_COLOR_PROF_THRESHOLD,
    MAX_CHANNEL_VALUE,
)
from ..dependencies import np
from ..imaging import channel_array, cosine_similarity, join_vectors
from .base import BatchSamer


@dataclass(frozen=True)
class ColorProf(BatchSamer):
    """
    Compares images by the correlation of their color histograms.

    The "correlation" is the cosine similarity of raw bin counts, not a
    Pearson correlation; the default threshold is tuned for it. Counts are
    not normalized by pixel count, which is fine because cosine similarity
    does not depend on vector length.

    Attributes:
        bin_count: Number of bins in each channel histogram. 0 means the
            default (8).
        threshold: Minimum correlation for two images to be considered the
            same. 0 means the default (0.97).
    """
    bin_count: int = 0
    threshold: float = 0.0

    name = "colorprof"

    @property
    def effective_bin_count(self) -> int:
        return self.bin_count or DEFAULT_COLOR_PROF_BIN_COUNT

    @property
    def effective_threshold(self) -> float:
        return self.threshold or DEFAULT_COLOR_PROF_THRESHOLD

    def bin_index(self, component):
        """
        Map channel intensities (0-65535) to histogram bins.

        Works on a single value or an integer array. The maximum intensity
        would land one past the last bin, so it is clamped into it.
        """
        bins = self.effective_bin_count
        return np.minimum((bins * np.asarray(component, dtype=np.int64)) // MAX_CHANNEL_VALUE, bins - 1)

    def histograms(self, img: Image.Image) -> list:
        """
        Generate the R, G and B histograms of an image.

        Returns:
            Three float vectors of length bin_count holding pixel counts
        """
        bins = self.effective_bin_count
        indices = self.bin_index(channel_array(img))
        return [
            np.bincount(indices[..., channel].ravel(), minlength=bins).astype(np.float64)
            for channel in range(3)
        ]

    @staticmethod
    def correlation(joined1, joined2) -> float:
        """Cosine similarity of two concatenated histograms (0.0 if degenerate)."""
        return cosine_similarity(joined1, joined2)

    def fingerprint(self, img: Image.Image):
        joined = join_vectors(self.histograms(img))
        joined.flags.writeable = False
        return joined

    def match(self, fp1, fp2) -> bool:
        return self.correlation(fp1, fp2) >= self.effective_threshold


__all__ = ['ColorProf']
