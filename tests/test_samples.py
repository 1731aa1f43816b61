"""
Unit tests for sample sources and image discovery.
"""

import random

import pytest
from PIL import Image

from samepic.discovery import find_image_files, load_image, stream_images
from samepic.errors import ImageLoadError, SampleError
from samepic.samples import DirSamples


class TestFindImageFiles:
    """Test find_image_files."""

    def test_finds_images_only(self, sample_dir):
        files = find_image_files(sample_dir)
        names = [f.rsplit('/', 1)[-1] for f in files]
        assert names == sorted(names)
        assert 'notes.txt' not in names
        assert len(files) == 4

    def test_recursive(self, sample_dir):
        subdir = sample_dir / "nested"
        subdir.mkdir()
        Image.new('RGB', (5, 5)).save(subdir / "deep.png")
        assert len(find_image_files(sample_dir)) == 4
        assert len(find_image_files(sample_dir, recursive=True)) == 5

    def test_empty_directory(self, temp_dir):
        assert find_image_files(temp_dir) == []


class TestLoadImage:
    """Test load_image and stream_images."""

    def test_load_valid(self, sample_dir):
        img = load_image(sample_dir / "dark_left.png")
        assert img.size == (100, 100)

    def test_load_invalid(self, sample_dir):
        with pytest.raises(ImageLoadError):
            load_image(sample_dir / "notes.txt")

    def test_load_missing(self, temp_dir):
        with pytest.raises(ImageLoadError):
            load_image(temp_dir / "missing.png")

    def test_stream_skips_undecodable(self, sample_dir):
        paths = [sample_dir / "dark_left.png", sample_dir / "notes.txt", sample_dir / "dark_right.png"]
        ids = [entry.id for entry in stream_images(paths)]
        assert ids == [str(paths[0]), str(paths[2])]


class TestDirSamples:
    """Test DirSamples."""

    def test_random(self, sample_dir):
        samples = DirSamples(sample_dir, rng=random.Random(0))
        for _ in range(10):
            img = samples.random()
            assert img.size == (100, 100)

    def test_random_drops_unusable_files(self, temp_dir):
        """A file that fails to decode leaves the pool for good."""
        (temp_dir / "a_junk.txt").write_text("not an image")
        Image.new('RGB', (8, 8)).save(temp_dir / "b_good.png")

        class FirstIndex(random.Random):
            def randrange(self, *args, **kwargs):
                return 0

        samples = DirSamples(temp_dir, rng=FirstIndex())
        assert samples.random().size == (8, 8)
        assert samples.image_paths == [str(temp_dir / "b_good.png")]

    def test_random_pair_differs(self, sample_dir):
        samples = DirSamples(sample_dir, rng=random.Random(2))
        for _ in range(10):
            img1, img2 = samples.random_pair()
            assert img1 is not img2

    def test_no_usable_images(self, temp_dir):
        (temp_dir / "a.txt").write_text("x")
        (temp_dir / "b.txt").write_text("y")
        samples = DirSamples(temp_dir)
        with pytest.raises(SampleError, match="no usable images"):
            samples.random()
        assert samples.image_paths == []

    def test_no_usable_pair(self, temp_dir):
        Image.new('RGB', (5, 5)).save(temp_dir / "only.png")
        (temp_dir / "junk.txt").write_text("x")
        samples = DirSamples(temp_dir, rng=random.Random(3))
        assert samples.random().size == (5, 5)
        with pytest.raises(SampleError, match="no usable pair"):
            samples.random_pair()

    def test_missing_directory(self, temp_dir):
        with pytest.raises(SampleError):
            DirSamples(temp_dir / "missing")
