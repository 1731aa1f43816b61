"""
Output formatting for the samepic command-line interface.

Pairs are printed as two consecutive lines (first identifier, then second)
so the output stays easy to consume from shell scripts.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from ..models import Pair, RateResult


def print_pair(pair: Pair, stream: Optional[TextIO] = None) -> None:
    """Print a pair as two lines."""
    stream = stream or sys.stdout
    print(pair.first, file=stream)
    print(pair.second, file=stream)
    stream.flush()


def print_rating(result: RateResult, stream: Optional[TextIO] = None) -> None:
    """Print the positive and negative success rates."""
    stream = stream or sys.stdout
    print(f"Positive rating: {result.positive}", file=stream)
    print(f"Negative rating: {result.negative}", file=stream)


__all__ = ['print_pair', 'print_rating']
