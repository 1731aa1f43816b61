"""
Exception types raised by samepic.

Zero-valued strategy options are never errors (they resolve to defaults),
and numeric degeneracy such as a zero-magnitude vector is reported as a
non-match rather than raised.
"""


class SamepicError(Exception):
    """Base exception for samepic errors."""


class ConfigurationError(SamepicError):
    """Unknown strategy name, missing option or unusable strategy settings."""


class SampleError(SamepicError):
    """A sample source ran out of usable images."""


class ImageLoadError(SamepicError):
    """An image file could not be opened or decoded."""


__all__ = [
    'SamepicError',
    'ConfigurationError',
    'SampleError',
    'ImageLoadError',
]
