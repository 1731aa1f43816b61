"""
Utilities package for samepic.

Provides:
- exporters: Export near-duplicate pairs to files
"""

from __future__ import annotations

from . import exporters
from .exporters import export_pairs

__all__ = [
    'exporters',
    'export_pairs',
]
