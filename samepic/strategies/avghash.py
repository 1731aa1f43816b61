"""
Average hash comparison.

Implements the average hash described at
http://www.hackerfactor.com/blog/index.php?/archives/432-Looks-Like-It.html:
scale the image down to a tiny square, then record for every pixel whether
it is brighter than the mean. The hash ignores size and position but is
sensitive to layout and tone.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from ..config import DEFAULT_AVERAGE_HASH_SCALE_SIZE, DEFAULT_AVERAGE_HASH_THRESHOLD
from ..dependencies import imagehash, np
from ..imaging import rgb_image
from .base import BatchSamer


@dataclass(frozen=True)
class AverageHash(BatchSamer):
    """
    Compares images by the fraction of matching average hash bits.

    Attributes:
        scale_size: Images are scaled to scale_size x scale_size before
            hashing, giving scale_size**2 bits. 0 means the default (8).
        threshold: Minimum fraction of bits that must match for two images
            to be considered the same. 0 means the default (0.9).
    """
    scale_size: int = 0
    threshold: float = 0.0

    name = "avghash"

    @property
    def effective_scale_size(self) -> int:
        return self.scale_size or DEFAULT_AVERAGE_HASH_SCALE_SIZE

    @property
    def effective_threshold(self) -> float:
        return self.threshold or DEFAULT_AVERAGE_HASH_THRESHOLD

    def hash(self, img: Image.Image) -> imagehash.ImageHash:
        """
        Create the average hash of an image.

        Args:
            img: Image of any mode

        Returns:
            ImageHash of scale_size**2 bits in row-major order
        """
        size = self.effective_scale_size
        scaled = rgb_image(img).resize((size, size), Image.Resampling.BILINEAR)
        brightness = np.asarray(scaled.convert('L'), dtype=np.float64) / 255.0
        return imagehash.ImageHash(brightness > brightness.mean())

    @staticmethod
    def match_ratio(hash1: imagehash.ImageHash, hash2: imagehash.ImageHash) -> float:
        """
        Fraction of bit positions at which two hashes agree.

        Raises:
            ValueError: If the hashes were made with different scale sizes
        """
        if hash1.hash.size != hash2.hash.size:
            raise ValueError(
                f"Hash sizes differ: {hash1.hash.size} vs {hash2.hash.size} bits"
            )
        if hash1.hash.size == 0:
            return 0.0
        return 1.0 - (hash1 - hash2) / hash1.hash.size

    def fingerprint(self, img: Image.Image) -> imagehash.ImageHash:
        return self.hash(img)

    def match(self, fp1: imagehash.ImageHash, fp2: imagehash.ImageHash) -> bool:
        return self.match_ratio(fp1, fp2) >= self.effective_threshold


__all__ = ['AverageHash']
