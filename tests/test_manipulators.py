"""
Unit tests for image manipulators.
"""

import random

import pytest
from PIL import Image

from samepic.manipulators import (
    DEFAULT_MANIPULATOR,
    AggregateManipulator,
    CompressJPEG,
    Crop,
    Manipulator,
    Scale,
    default_manipulator,
)


class Recorder(Manipulator):
    """Records each call and tags the image by flipping it."""

    def __init__(self, log, tag):
        super().__init__()
        self.log = log
        self.tag = tag

    def manipulate(self, img):
        self.log.append(self.tag)
        return img.transpose(Image.Transpose.FLIP_LEFT_RIGHT)


class TestCompressJPEG:
    """Test CompressJPEG."""

    def test_keeps_size(self, wave_image):
        out = CompressJPEG(rng=random.Random(0)).manipulate(wave_image)
        assert out.size == wave_image.size
        assert out.mode == 'RGB'

    def test_input_untouched(self, wave_image):
        before = wave_image.tobytes()
        CompressJPEG(10, 20, rng=random.Random(1)).manipulate(wave_image)
        assert wave_image.tobytes() == before

    def test_accepts_alpha(self):
        img = Image.new('RGBA', (16, 16), color=(10, 20, 30, 128))
        assert CompressJPEG(90, 90).manipulate(img).mode == 'RGB'


class TestScale:
    """Test Scale."""

    def test_fixed_ratio(self, wave_image):
        out = Scale(0.5, 0.5, rng=random.Random(0)).manipulate(wave_image)
        assert out.size == (300, 100)

    def test_keeps_aspect_ratio(self, wave_image):
        scaler = Scale(rng=random.Random(2))
        for _ in range(10):
            out = scaler.manipulate(wave_image)
            assert 300 <= out.width <= 900
            assert out.height == pytest.approx(out.width / 3, abs=1)

    def test_single_interpolation(self, wave_image):
        out = Scale(2.0, 2.0, interpolations=[Image.Resampling.NEAREST]).manipulate(wave_image)
        assert out.size == (1200, 400)


class TestCrop:
    """Test Crop."""

    def test_bounds_landscape(self, wave_image):
        cropper = Crop(0.5, 0.8, rng=random.Random(3))
        for _ in range(20):
            out = cropper.manipulate(wave_image)
            assert 300 <= out.width <= 600
            assert 160 <= out.height <= 200

    def test_bounds_portrait(self, wave_image):
        portrait = wave_image.transpose(Image.Transpose.ROTATE_90)
        cropper = Crop(0.5, 0.8, rng=random.Random(4))
        for _ in range(20):
            out = cropper.manipulate(portrait)
            assert 160 <= out.width <= 200
            assert 300 <= out.height <= 600

    def test_keep_everything(self, wave_image):
        out = Crop(1.0, 1.0).manipulate(wave_image)
        assert out.tobytes() == wave_image.tobytes()

    def test_square_picks_either_axis(self):
        img = Image.new('RGB', (100, 100))
        cropper = Crop(0.5, 1.0, rng=random.Random(5))
        shapes = {cropper.manipulate(img).size for _ in range(40)}
        assert any(w < 100 and h == 100 for w, h in shapes)
        assert any(h < 100 and w == 100 for w, h in shapes)


class TestAggregateManipulator:
    """Test AggregateManipulator."""

    def test_applies_in_order(self, wave_image):
        log = []
        aggregate = AggregateManipulator(
            [Recorder(log, 'a'), Recorder(log, 'b')], [1.0, 1.0]
        )
        out = aggregate.manipulate(wave_image)
        assert log == ['a', 'b']
        # Two flips cancel out
        assert out.tobytes() == wave_image.tobytes()

    def test_probability_zero_skips(self, wave_image):
        log = []
        aggregate = AggregateManipulator(
            [Recorder(log, 'a'), Recorder(log, 'b')], [1.0, 0.0], rng=random.Random(6)
        )
        for _ in range(10):
            aggregate.manipulate(wave_image)
        assert log == ['a'] * 10

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            AggregateManipulator([Scale()], [0.5, 0.5])

    def test_default_manipulator(self, wave_image):
        manipulator = default_manipulator(random.Random(7))
        assert len(manipulator.manipulators) == 3
        assert manipulator.probabilities == [0.5, 0.5, 0.5]
        for _ in range(5):
            out = manipulator.manipulate(wave_image)
            assert out.width > 0 and out.height > 0

    def test_default_instance(self):
        assert isinstance(DEFAULT_MANIPULATOR, AggregateManipulator)
