"""
Unit tests for pair export.
"""

import csv

import pytest

from samepic.models import Pair
from samepic.utils.exporters import export_pairs


@pytest.fixture
def pairs():
    return [Pair("/photos/a.jpg", "/photos/b.jpg"), Pair("/photos/c.png", "/photos/d.png")]


class TestExportPairs:
    """Test export_pairs."""

    def test_txt(self, pairs, temp_dir):
        output = temp_dir / "pairs.txt"
        export_pairs(pairs, output)
        content = output.read_text(encoding='utf-8')
        assert content.startswith("NEAR-DUPLICATE PAIRS")
        assert "Pair 1:\n  /photos/a.jpg\n  /photos/b.jpg" in content
        assert "Pair 2:" in content

    def test_csv(self, pairs, temp_dir):
        output = temp_dir / "pairs.csv"
        export_pairs(iter(pairs), output, 'csv')
        with open(output, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert rows == [
            ['pair_id', 'first', 'second'],
            ['1', '/photos/a.jpg', '/photos/b.jpg'],
            ['2', '/photos/c.png', '/photos/d.png'],
        ]

    def test_empty(self, temp_dir):
        output = temp_dir / "empty.csv"
        export_pairs([], output, 'csv')
        assert output.read_text(encoding='utf-8').strip() == "pair_id,first,second"

    def test_unknown_format(self, pairs, temp_dir):
        with pytest.raises(ValueError, match="Unsupported export format"):
            export_pairs(pairs, temp_dir / "pairs.json", 'json')

    def test_pair_to_dict(self):
        assert Pair(1, 2).to_dict() == {'first': '1', 'second': '2'}
