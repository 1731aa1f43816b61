"""
Accuracy rating of comparison strategies.

Half of the trials give the strategy two independent manipulations of the
same sample (it should answer "same"); the other half give it two different
samples (it should answer "different").
"""

from __future__ import annotations

import logging

from .dependencies import progress_bar
from .manipulators import Manipulator
from .models import RateResult
from .samples import Samples
from .strategies.base import Samer

logger = logging.getLogger(__name__)


def rate(
    samer: Samer,
    samples: Samples,
    manipulator: Manipulator,
    n: int,
    show_progress: bool = False,
) -> RateResult:
    """
    Compute the positive and negative success rates of a strategy.

    Args:
        samer: Strategy under test
        samples: Source of random images and random distinct pairs
        manipulator: Produces the altered copies used for positive trials
        n: Total number of trials, rounded down to an even number
        show_progress: Whether to show a tqdm progress bar

    Returns:
        RateResult(positive, negative): fraction of positive trials judged
        "same" and fraction of negative trials judged "different"

    Raises:
        ValueError: If n < 2
        SampleError: If the sample source runs out; no partial result is
            returned
    """
    half = n // 2
    if half == 0:
        raise ValueError(f"need at least 2 trials, got {n}")

    pbar = progress_bar(total=half * 2, desc="Rating", unit="trial", enabled=show_progress)
    try:
        positive_correct = 0
        for _ in range(half):
            sample = samples.random()
            img1 = manipulator.manipulate(sample)
            img2 = manipulator.manipulate(sample)
            if samer.same(img1, img2):
                positive_correct += 1
            if pbar is not None:
                pbar.update(1)

        negative_correct = 0
        for _ in range(half):
            img1, img2 = samples.random_pair()
            if not samer.same(img1, img2):
                negative_correct += 1
            if pbar is not None:
                pbar.update(1)
    finally:
        if pbar is not None:
            pbar.close()

    result = RateResult(positive_correct / half, negative_correct / half)
    logger.info(
        f"Rated {getattr(samer, 'name', type(samer).__name__)} over {half * 2} trials: "
        f"positive {result.positive:.3f}, negative {result.negative:.3f}"
    )
    return result


__all__ = ['rate']
