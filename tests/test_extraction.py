"""
Tests for translation batch extraction.
"""

import pytest

from catalog_merger.errors import MissingColumnsError
from catalog_merger.extraction import (
    CHUNK_SIZE,
    TRANSLATABLE_COLUMNS,
    chunk_rows,
    extract_batches,
    iter_batches,
)
from tests.factories import make_unified


class TestChunkRows:
    """Order-preserving chunking."""

    def test_sizes(self):
        chunks = chunk_rows(list(range(1450)), 600)
        assert [len(c) for c in chunks] == [600, 600, 250]

    def test_exact_multiple(self):
        assert [len(c) for c in chunk_rows(list(range(1200)), 600)] == [600, 600]

    def test_empty(self):
        assert chunk_rows([], 600) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk_rows([1], 0)


class TestExtractBatches:
    """Batches per column."""

    def test_large_text_column_is_chunked(self):
        unified = make_unified(1450)

        batches = extract_batches(unified)

        description = batches["description"]
        assert CHUNK_SIZE == 600
        assert [len(b) for b in description] == [600, 600, 250]

        indexes = [row["row_index"] for b in description for row in b.rows]
        assert indexes == list(range(1450))
        assert description[1].rows[0]["row_index"] == 600
        assert description[2].rows[0]["SKU"] == "SKU1200"

    def test_other_columns_single_batch(self):
        unified = make_unified(1450)

        batches = extract_batches(unified)

        for column in ("Title", "Category", "Subcategory"):
            assert len(batches[column]) == 1
            assert len(batches[column][0]) == 1450
            assert batches[column][0].part is None

    def test_row_schema(self):
        batches = extract_batches(make_unified(2))

        assert batches["Title"][0].rows[1] == {"row_index": 1, "SKU": "SKU1", "Title": "Title 1"}

    def test_filenames(self):
        batches = extract_batches(make_unified(700))

        names = [b.filename for b in iter_batches(batches)]
        assert names == [
            "Title.xlsx",
            "Category.xlsx",
            "Subcategory.xlsx",
            "description_part1.xlsx",
            "description_part2.xlsx",
        ]

    def test_missing_column_fails(self):
        unified = [{"SKU": "A", "Title": "t", "Category": "c", "description": "d"}]

        with pytest.raises(MissingColumnsError) as exc_info:
            extract_batches(unified)

        assert exc_info.value.details["missing"] == ["Subcategory"]

    def test_only_first_record_is_checked(self):
        unified = make_unified(1) + [{"SKU": "B"}]

        batches = extract_batches(unified, TRANSLATABLE_COLUMNS)

        assert batches["Title"][0].rows[1] == {"row_index": 1, "SKU": "B", "Title": ""}

    def test_empty_unified_fails(self):
        with pytest.raises(MissingColumnsError):
            extract_batches([])

    def test_custom_columns(self):
        batches = extract_batches(make_unified(3), columns=["Title"])
        assert list(batches) == ["Title"]
