"""
Comparison strategies for samepic.

Public API:
- Samer: Base class; same(img1, img2) -> bool
- BatchSamer: Samer with fingerprint/match steps and same_batch()
- AverageHash: Average hash bit signature ("avghash")
- ColorProf: Color histogram correlation ("colorprof")
- SquashComp: Crop and scale tolerant squashed-line correlation ("squashcomp")
- create_samer / create_batch_samer: Construct a strategy by name
"""

from __future__ import annotations

from .base import Samer, BatchSamer
from .avghash import AverageHash
from .colorprof import ColorProf
from .squashcomp import SquashAxis, SquashProfile, SquashComp
from .registry import SAMERS, available_samers, create_samer, create_batch_samer

__all__ = [
    # Interfaces
    'Samer',
    'BatchSamer',
    # Strategies
    'AverageHash',
    'ColorProf',
    'SquashAxis',
    'SquashProfile',
    'SquashComp',
    # Construction by name
    'SAMERS',
    'available_samers',
    'create_samer',
    'create_batch_samer',
]
