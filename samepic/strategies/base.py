"""
Base classes for image comparison strategies.

Every strategy answers one question: do two images show the same subject?
Strategies that reduce an image to a reusable fingerprint also support
batch matching, where each image is fingerprinted once and compared against
every earlier one.

Strategies hold nothing but their configuration, which is fixed when they
are constructed. They can be shared between threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Optional

from PIL import Image

from ..batch import stream_pairs
from ..config import BATCH_QUEUE_SIZE
from ..models import IDImage, Pair


class Samer(ABC):
    """Estimates whether or not two images are of the same subject."""

    #: Registry name of the strategy
    name: str = ""

    @abstractmethod
    def same(self, img1: Image.Image, img2: Image.Image) -> bool:
        """
        Decide whether two images show the same subject.

        Args:
            img1: First image (not modified)
            img2: Second image (not modified)

        Returns:
            True if the images are considered near duplicates
        """


class BatchSamer(Samer):
    """
    A strategy split into a fingerprinting step and a match predicate.

    Subclasses implement ``fingerprint`` and ``match``; ``same`` and
    ``same_batch`` are built on top of them.
    """

    @abstractmethod
    def fingerprint(self, img: Image.Image) -> Any:
        """Compute the fingerprint of a single image."""

    @abstractmethod
    def match(self, fp1: Any, fp2: Any) -> bool:
        """Decide whether two fingerprints belong to the same subject."""

    def same(self, img1: Image.Image, img2: Image.Image) -> bool:
        return self.match(self.fingerprint(img1), self.fingerprint(img2))

    def same_batch(
        self,
        images: Iterable[IDImage],
        queue_size: Optional[int] = None,
    ) -> Iterator[Pair]:
        """
        Find pairs of near duplicates in a stream of images.

        Args:
            images: Iterable of IDImage, possibly produced lazily
            queue_size: Output channel capacity (default BATCH_QUEUE_SIZE)

        Returns:
            Iterator yielding each matching Pair as soon as it is found
        """
        return stream_pairs(
            self.fingerprint,
            self.match,
            images,
            queue_size=queue_size or BATCH_QUEUE_SIZE,
        )


__all__ = ['Samer', 'BatchSamer']
