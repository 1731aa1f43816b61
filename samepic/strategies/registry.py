"""
Construct comparison strategies by name.

Each registered name maps to a small constructor that accepts a threshold
plus the options that strategy understands. Options left at zero or None
fall back to the strategy defaults.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..errors import ConfigurationError
from .avghash import AverageHash
from .base import BatchSamer, Samer
from .colorprof import ColorProf
from .squashcomp import SquashAxis, SquashComp

logger = logging.getLogger(__name__)


def _avghash(threshold: float, scale_size: Optional[int] = None, **_) -> Samer:
    return AverageHash(scale_size=scale_size or 0, threshold=threshold)


def _colorprof(threshold: float, bin_count: Optional[int] = None, **_) -> Samer:
    return ColorProf(bin_count=bin_count or 0, threshold=threshold)


def _squashcomp(
    threshold: float,
    axis=None,
    min_overlap: Optional[float] = None,
    vector_size: Optional[int] = None,
    **_,
) -> Samer:
    try:
        parsed_axis = SquashAxis.parse(axis) if axis is not None else SquashAxis.VERTICAL
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    return SquashComp(
        axis=parsed_axis,
        min_overlap=min_overlap or 0.0,
        vector_size=vector_size or 0,
        threshold=threshold,
    )


SAMERS: dict[str, Callable[..., Samer]] = {
    'avghash': _avghash,
    'colorprof': _colorprof,
    'squashcomp': _squashcomp,
}


def available_samers() -> list[str]:
    """Names accepted by create_samer."""
    return sorted(SAMERS)


def create_samer(name: str, threshold: Optional[float] = None, **options) -> Samer:
    """
    Create a comparison strategy by name.

    Args:
        name: One of available_samers()
        threshold: Match threshold; None or 0 uses the strategy default
        **options: Strategy-specific options (scale_size, bin_count, axis,
            min_overlap, vector_size); options another strategy uses are
            ignored

    Returns:
        The configured Samer

    Raises:
        ConfigurationError: If the name is missing or unknown, or an option
            value is invalid
    """
    if not name:
        raise ConfigurationError("missing samer name")
    factory = SAMERS.get(name)
    if factory is None:
        raise ConfigurationError(
            f"unknown samer: {name} (choose from {', '.join(available_samers())})"
        )
    samer = factory(threshold or 0.0, **options)
    logger.debug(f"Created samer {samer!r}")
    return samer


def create_batch_samer(name: str, threshold: Optional[float] = None, **options) -> BatchSamer:
    """
    Like create_samer, but the strategy must support batch matching.

    Raises:
        ConfigurationError: If the strategy cannot be used for batches
    """
    samer = create_samer(name, threshold, **options)
    if not isinstance(samer, BatchSamer):
        raise ConfigurationError(f"samer cannot be used for batches: {name}")
    return samer


__all__ = ['SAMERS', 'available_samers', 'create_samer', 'create_batch_samer']
