"""
Image discovery and loading.

Provides functionality to find image files in directories, decode them,
and stream them into batch matching as IDImage values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from .config import IMAGE_EXTENSIONS
from .dependencies import Image, HAS_HEIF_SUPPORT
from .errors import ImageLoadError
from .models import IDImage

logger = logging.getLogger(__name__)


def find_image_files(root_path: str | Path, recursive: bool = False) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively

    Returns:
        Sorted list of absolute file paths as strings

    Notes:
        - HEIC/HEIF files are skipped if pillow-heif is not installed
        - Files reached through several symlinks are listed once
    """
    root = Path(root_path)

    extensions_to_scan = IMAGE_EXTENSIONS
    if not HAS_HEIF_SUPPORT:
        extensions_to_scan = {ext for ext in IMAGE_EXTENSIONS if ext not in {'.heic', '.heif'}}

    seen = set()
    iterator = root.rglob('*') if recursive else root.glob('*')
    for filepath in iterator:
        if filepath.is_file() and filepath.suffix.lower() in extensions_to_scan:
            seen.add(str(filepath.resolve()))

    return sorted(seen)


def load_image(filepath: str | Path) -> Image.Image:
    """
    Open and fully decode an image file.

    Raises:
        ImageLoadError: If the file is missing, unreadable, not an image,
            or truncated
    """
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated/corrupt images early
            img.load()
            return img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"decode {filepath}: {e}") from e


def stream_images(filepaths: Iterable[str | Path]) -> Iterator[IDImage]:
    """
    Lazily decode images, yielding each with its path as identifier.

    Files that fail to decode are logged and skipped.
    """
    for filepath in filepaths:
        try:
            img = load_image(filepath)
        except ImageLoadError as e:
            logger.warning(str(e))
            continue
        yield IDImage(id=str(filepath), image=img)


__all__ = ['find_image_files', 'load_image', 'stream_images']
