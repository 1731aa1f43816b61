"""
Pytest configuration and shared fixtures for test suite.
"""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def make_wave_image(width=600, height=200, periods=(3, 2, 5)):
    """
    Build a smooth image whose color varies along x as sine waves.

    Each channel uses a different number of periods across the width, and
    brightness ramps up from top to bottom so the layout is not uniform.
    """
    x = np.arange(width) / width
    line = np.stack(
        [0.5 + 0.4 * np.sin(2 * np.pi * p * x + i) for i, p in enumerate(periods)],
        axis=-1,
    )
    ramp = 0.6 + 0.4 * np.arange(height) / height
    pixels = line[np.newaxis, :, :] * ramp[:, np.newaxis, np.newaxis]
    return Image.fromarray(np.round(pixels * 255).astype(np.uint8))


def make_split_image(size=100, dark_left=True):
    """Build a square image that is black on one half and white on the other."""
    pixels = np.zeros((size, size, 3), dtype=np.uint8)
    if dark_left:
        pixels[:, size // 2:] = 255
    else:
        pixels[:, :size // 2] = 255
    return Image.fromarray(pixels)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def wave_image():
    """A 600x200 landscape image with smooth horizontal structure."""
    return make_wave_image()


@pytest.fixture
def split_images():
    """Black|white and white|black square images."""
    return make_split_image(dark_left=True), make_split_image(dark_left=False)


@pytest.fixture
def sample_dir(temp_dir):
    """
    Create a directory of sample images for discovery and CLI tests.

    Contains:
        - dark_left.png, dark_left_copy.png (identical)
        - dark_right.png, dark_right_copy.jpg (same picture, JPEG copy)
        - notes.txt (not an image)
    """
    dark_left, dark_right = make_split_image(dark_left=True), make_split_image(dark_left=False)
    dark_left.save(temp_dir / "dark_left.png")
    dark_left.save(temp_dir / "dark_left_copy.png")
    dark_right.save(temp_dir / "dark_right.png")
    dark_right.save(temp_dir / "dark_right_copy.jpg", quality=95)
    (temp_dir / "notes.txt").write_text("not an image")
    return temp_dir


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Point the user configuration at an empty temporary directory."""
    from samepic.user_config import get_user_config

    config_dir = temp_dir / "config"
    monkeypatch.setenv('SAMEPIC_CONFIG_DIR', str(config_dir))
    for var in ('SAMEPIC_SAMER', 'SAMEPIC_THRESHOLD', 'SAMEPIC_RATE_COUNT', 'SAMEPIC_QUEUE_SIZE',
                'SAMEPIC_MAX_PIXELS'):
        monkeypatch.delenv(var, raising=False)
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


@pytest.fixture
def make_wave():
    """Factory for wave images of any size or frequencies."""
    return make_wave_image


@pytest.fixture
def make_split():
    """Factory for black/white split images."""
    return make_split_image
