"""
Data models for samepic.

Contains the dataclasses passed in and out of batch matching and the result
type of the rating harness.
"""

from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple

from PIL import Image


@dataclass(frozen=True)
class IDImage:
    """
    An image paired with a caller-defined identifier.

    Attributes:
        id: Opaque identifier (a path, a database key, ...). It is carried
            through batch matching unchanged and never interpreted.
        image: The decoded image
    """
    id: Any
    image: Image.Image


@dataclass(frozen=True)
class Pair:
    """
    Two identifiers whose images were found to be near duplicates.

    ``first`` is always the identifier of the image that arrived earlier in
    the batch. A pair unpacks like a 2-tuple::

        first, second = pair
    """
    first: Any
    second: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.first
        yield self.second

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {'first': str(self.first), 'second': str(self.second)}


class RateResult(NamedTuple):
    """Success rates of a strategy on positive and negative samples."""
    positive: float
    negative: float


__all__ = ['IDImage', 'Pair', 'RateResult']
