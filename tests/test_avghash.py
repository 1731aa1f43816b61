"""
Unit tests for the average hash strategy.
"""

import numpy as np
import pytest
from PIL import Image

from samepic.strategies import AverageHash


class TestHash:
    """Test AverageHash.hash."""

    def test_default_length(self, wave_image):
        """Default hash has 8x8 = 64 bits."""
        h = AverageHash().hash(wave_image)
        assert h.hash.size == 64

    @pytest.mark.parametrize("scale_size", [4, 8, 16])
    def test_length_follows_scale_size(self, wave_image, scale_size):
        """Hash has scale_size**2 bits."""
        h = AverageHash(scale_size=scale_size).hash(wave_image)
        assert len(h.hash.flatten()) == scale_size ** 2

    def test_bits_are_brighter_than_mean(self, split_images):
        """Only the white half of a black|white image is above the mean."""
        dark_left, _ = split_images
        bits = AverageHash().hash(dark_left).hash
        assert not bits[:, :4].any()
        assert bits[:, 4:].all()

    def test_ignores_alpha(self, split_images):
        """RGBA images hash like their RGB content."""
        dark_left, _ = split_images
        rgba = dark_left.convert('RGBA')
        rgba.putalpha(10)
        samer = AverageHash()
        assert samer.hash(rgba) - samer.hash(dark_left) == 0

    def test_wide_grayscale(self):
        """16-bit grayscale images can be hashed."""
        pixels = np.zeros((32, 32), dtype=np.uint16)
        pixels[:, 16:] = 60000
        img = Image.fromarray(pixels)
        assert img.mode == 'I;16'
        bits = AverageHash(scale_size=4).hash(img).hash
        assert bits[:, 2:].all()
        assert not bits[:, :2].any()

    def test_does_not_modify_image(self, wave_image):
        """Hashing leaves the image untouched."""
        before = wave_image.tobytes()
        AverageHash().hash(wave_image)
        assert wave_image.tobytes() == before


class TestMatchRatio:
    """Test AverageHash.match_ratio."""

    def test_self_ratio_is_one(self, wave_image):
        h = AverageHash().hash(wave_image)
        assert AverageHash.match_ratio(h, h) == 1.0

    def test_symmetric(self, wave_image, split_images):
        samer = AverageHash()
        h1 = samer.hash(wave_image)
        h2 = samer.hash(split_images[0])
        assert samer.match_ratio(h1, h2) == samer.match_ratio(h2, h1)

    def test_inverted_images(self, split_images):
        """Mirror-image halves disagree on every bit."""
        samer = AverageHash()
        h1, h2 = (samer.hash(img) for img in split_images)
        assert samer.match_ratio(h1, h2) == 0.0

    def test_mismatched_sizes_raise(self, wave_image):
        """Hashes of different scale sizes cannot be compared."""
        h1 = AverageHash(scale_size=4).hash(wave_image)
        h2 = AverageHash(scale_size=8).hash(wave_image)
        with pytest.raises(ValueError):
            AverageHash.match_ratio(h1, h2)


class TestSame:
    """Test AverageHash.same."""

    def test_identical_copy(self, wave_image):
        assert AverageHash().same(wave_image, wave_image.copy())

    def test_rescaled_copy(self, split_images):
        """Scaling does not change the hash of a simple layout."""
        img = split_images[0]
        assert AverageHash().same(img, img.resize((300, 300), Image.Resampling.BILINEAR))

    def test_different_images(self, split_images):
        assert not AverageHash().same(*split_images)

    def test_low_threshold_accepts_partial_match(self, split_images, make_wave):
        """Any agreeing bit satisfies a near-zero threshold."""
        dark_left, _ = split_images
        wave = make_wave(width=100, height=100)
        assert AverageHash(threshold=1e-9).same(dark_left, wave)

    def test_defaults_not_mutated(self, wave_image):
        """Unset options resolve to defaults without being rewritten."""
        samer = AverageHash()
        samer.same(wave_image, wave_image)
        assert samer.scale_size == 0
        assert samer.threshold == 0.0
        assert samer.effective_scale_size == 8
        assert samer.effective_threshold == 0.9
