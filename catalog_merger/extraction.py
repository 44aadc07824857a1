"""Slice unified records into translation batches.

Every translatable column becomes one batch of ``{row_index, SKU, <column>}``
rows, except the long description column which is split into chunks of
``CHUNK_SIZE`` rows. ``row_index`` is always the row's position in the full
unified set so translated chunks can be put back in order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import structlog

from .errors import MissingColumnsError
from .records import cell, record_columns
from .sku import SKU_FIELD

logger = structlog.get_logger(__name__)

ROW_INDEX_FIELD = 'row_index'
TRANSLATABLE_COLUMNS: Tuple[str, ...] = ('Title', 'Category', 'Subcategory', 'description')
LARGE_TEXT_COLUMN = 'description'
CHUNK_SIZE = 600
BATCH_EXTENSION = '.xlsx'


@dataclass(frozen=True)
class Batch:
    column: str
    rows: Tuple[Dict[str, Any], ...]
    part: Optional[int] = None

    @property
    def filename(self) -> str:
        if self.part is None:
            return f"{self.column}{BATCH_EXTENSION}"
        return f"{self.column}_part{self.part}{BATCH_EXTENSION}"

    def __len__(self) -> int:
        return len(self.rows)


def chunk_rows(rows: Sequence[Any], size: int = CHUNK_SIZE) -> List[Sequence[Any]]:
    if size < 1:
        raise ValueError("Chunk size must be positive.")
    return [rows[start:start + size] for start in range(0, len(rows), size)]


def check_columns(unified: Sequence[Mapping[str, Any]], columns: Iterable[str]) -> None:
    """Raise MissingColumnsError unless the first record has every column."""
    columns = list(columns)
    available = set(record_columns(unified))
    missing = [c for c in columns if c not in available]
    if missing:
        raise MissingColumnsError(missing)


def column_rows(unified: Sequence[Mapping[str, Any]], column: str) -> List[Dict[str, Any]]:
    return [
        {ROW_INDEX_FIELD: idx, SKU_FIELD: cell(record, SKU_FIELD), column: cell(record, column)}
        for idx, record in enumerate(unified)
    ]


def extract_batches(
    unified: Sequence[Mapping[str, Any]],
    columns: Iterable[str] = TRANSLATABLE_COLUMNS,
    large_text_column: str = LARGE_TEXT_COLUMN,
    chunk_size: int = CHUNK_SIZE,
) -> Dict[str, List[Batch]]:
    """Column -> ordered batches. Nothing is produced if a column is missing."""
    columns = list(dict.fromkeys(columns))
    check_columns(unified, columns)

    batches: Dict[str, List[Batch]] = {}
    for column in columns:
        rows = column_rows(unified, column)
        if column == large_text_column:
            batches[column] = [
                Batch(column=column, rows=tuple(chunk), part=part)
                for part, chunk in enumerate(chunk_rows(rows, chunk_size), start=1)
            ]
        else:
            batches[column] = [Batch(column=column, rows=tuple(rows))]

    logger.info(
        "batches_extracted",
        rows=len(unified),
        batches={column: len(items) for column, items in batches.items()},
    )
    return batches


def iter_batches(batches: Mapping[str, Sequence[Batch]]) -> List[Batch]:
    return [batch for items in batches.values() for batch in items]
