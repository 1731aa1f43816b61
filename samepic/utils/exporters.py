"""
Export functionality for samepic.

Provides functions to export near-duplicate pairs to TXT and CSV files.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, TextIO

from ..models import Pair


def _export_txt(pairs: list[Pair], file_handle: TextIO) -> None:
    """
    Export pairs to TXT format, one blank-line separated block per pair.

    Args:
        pairs: Near-duplicate pairs
        file_handle: Open file handle to write to
    """
    file_handle.write("NEAR-DUPLICATE PAIRS\n")
    file_handle.write("=" * 70 + "\n")
    for i, pair in enumerate(pairs, 1):
        file_handle.write(f"\nPair {i}:\n")
        file_handle.write(f"  {pair.first}\n")
        file_handle.write(f"  {pair.second}\n")


def _export_csv(pairs: list[Pair], file_handle: TextIO) -> None:
    """
    Export pairs to CSV format with columns pair_id, first, second.
    """
    writer = csv.writer(file_handle)
    writer.writerow(['pair_id', 'first', 'second'])
    for i, pair in enumerate(pairs, 1):
        writer.writerow([i, pair.first, pair.second])


def export_pairs(
    pairs: Iterable[Pair],
    output_path: Path,
    export_format: str = 'txt',
) -> None:
    """
    Export near-duplicate pairs to a file.

    Args:
        pairs: Pairs to write
        output_path: Path to output file
        export_format: Export format ('txt' or 'csv'). Default: 'txt'

    Raises:
        ValueError: If export_format is not 'txt' or 'csv'
        OSError: If file cannot be written
    """
    if export_format not in ('txt', 'csv'):
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt' or 'csv'.")

    pairs = list(pairs)
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(pairs, f)
        else:
            _export_csv(pairs, f)


__all__ = ['export_pairs']
