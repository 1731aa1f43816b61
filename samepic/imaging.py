"""
Pixel access and small vector helpers shared by the comparison strategies.

Images are read on a common 0-65535 channel scale regardless of their mode;
alpha is ignored. Vectors are 1-D numpy float arrays of tens to hundreds of
elements.
"""

from __future__ import annotations

from typing import Sequence

from .config import MAX_CHANNEL_VALUE
from .dependencies import Image, np

# Modes whose samples are wider than 8 bits
_WIDE_MODES = {'I', 'I;16', 'I;16L', 'I;16B', 'I;16N'}


def _wide_samples(img: Image.Image):
    """Return the samples of a 16/32-bit grayscale image clipped to 0-65535."""
    return np.clip(np.asarray(img, dtype=np.int64), 0, MAX_CHANNEL_VALUE)


def rgb_image(img: Image.Image) -> Image.Image:
    """
    Return an RGB version of an image.

    Alpha is dropped rather than composited. Wide grayscale modes are reduced
    to 8 bits first since Pillow cannot convert them to RGB directly.
    """
    if img.mode == 'RGB':
        return img
    if img.mode in _WIDE_MODES:
        narrow = (_wide_samples(img) >> 8).astype(np.uint8)
        return Image.fromarray(narrow).convert('RGB')
    if img.mode == 'P' and 'transparency' in img.info:
        img = img.convert('RGBA')
    return img.convert('RGB')


def channel_array(img: Image.Image):
    """
    Read every pixel's red, green and blue intensity.

    Args:
        img: Image of any mode

    Returns:
        Integer array of shape (height, width, 3) on the 0-65535 scale
    """
    if img.mode in _WIDE_MODES:
        gray = _wide_samples(img)
        return np.stack([gray, gray, gray], axis=-1)
    return np.asarray(rgb_image(img), dtype=np.int64) * 257


def float_channels(img: Image.Image) -> list[Image.Image]:
    """
    Split an image into floating point ("F" mode) R, G and B bands.

    Resampling float bands avoids the 8-bit rounding Pillow applies when
    resizing RGB images. Band values are on the 0-255 scale.
    """
    return [band.convert('F') for band in rgb_image(img).split()]


def join_vectors(vectors: Sequence) -> np.ndarray:
    """Concatenate vectors into one."""
    if not vectors:
        return np.zeros(0, dtype=np.float64)
    return np.concatenate([np.asarray(v, dtype=np.float64) for v in vectors])


def cosine_similarity(a, b) -> float:
    """
    Dot product of two vectors divided by the product of their magnitudes.

    Empty or zero-magnitude input has no defined direction and yields 0.0.

    Raises:
        ValueError: If the vectors differ in length
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector lengths differ: {a.shape} vs {b.shape}")
    if a.size == 0:
        return 0.0
    magnitude = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if magnitude == 0.0:
        return 0.0
    return float(np.dot(a, b)) / magnitude


__all__ = [
    'rgb_image',
    'channel_array',
    'float_channels',
    'join_vectors',
    'cosine_similarity',
]
