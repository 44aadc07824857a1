"""Re-import externally translated batches and apply them to unified records.

Translators return the batch files with the value column renamed to the
target language, so the value header is resolved through ``HEADER_VARIANTS``
first, then the canonical column name, then its position.
"""
from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from .errors import EmptyTranslationError
from .extraction import ROW_INDEX_FIELD
from .records import Record
from .sku import SKU_FIELD

logger = structlog.get_logger(__name__)

HEADER_VARIANTS: Dict[str, Tuple[str, ...]] = {
    'Title': (
        'Titel', 'Title (DE)', 'Title_DE', 'Translated Title',
        'Titre', 'Título', 'Titolo',
    ),
    'Category': (
        'Kategorie', 'Category (DE)', 'Category_DE', 'Translated Category',
        'Catégorie', 'Categoría', 'Categoria',
    ),
    'Subcategory': (
        'Unterkategorie', 'Subcategory (DE)', 'Subcategory_DE', 'Translated Subcategory',
        'Sous-catégorie', 'Subcategoría', 'Sottocategoria',
    ),
    'description': (
        'Beschreibung', 'Produktbeschreibung', 'Description (DE)', 'Description_DE',
        'Translated Description', 'Descripción', 'Descrizione',
    ),
}

# Positional fallbacks when a header cannot be matched by name.
ROW_INDEX_POSITION = 0
SKU_POSITION = 1
VALUE_POSITION = 2
DEFAULT_ROW_INDEX = '0'

TranslationMap = Dict[str, str]


def _fold(name: Any) -> str:
    return str(name).strip().casefold()


def _find_header(keys: Sequence[Any], candidates: Sequence[str]) -> Optional[Any]:
    folded = [_fold(k) for k in keys]
    for candidate in candidates:
        target = _fold(candidate)
        for key, name in zip(keys, folded):
            if name == target:
                return key
    return None


def _at(keys: Sequence[Any], position: int) -> Optional[Any]:
    return keys[position] if len(keys) > position else None


def resolve_columns(keys: Sequence[Any], column: str) -> Tuple[Optional[Any], Optional[Any], Optional[Any]]:
    """Header keys for (row index, SKU, translated value) of one row.

    Each key is matched by name, case-insensitively, and falls back to its
    position when no name matches. None means the row is too short.
    """
    keys = list(keys)
    row_index_key = _find_header(keys, [ROW_INDEX_FIELD])
    if row_index_key is None:
        row_index_key = _at(keys, ROW_INDEX_POSITION)

    sku_key = _find_header(keys, [SKU_FIELD])
    if sku_key is None:
        sku_key = _at(keys, SKU_POSITION)

    value_key = _find_header(keys, HEADER_VARIANTS.get(column, ()))
    if value_key is None:
        value_key = _find_header(keys, [column])
    if value_key is None:
        value_key = _at(keys, VALUE_POSITION)

    return row_index_key, sku_key, value_key


def _text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value if isinstance(value, str) else str(value)


def row_index_sort_key(row: Mapping[str, Any]) -> float:
    """Numeric row index; anything non-numeric sorts last."""
    try:
        value = float(str(row.get(ROW_INDEX_FIELD, '')).strip())
    except (TypeError, ValueError):
        return math.inf
    return math.inf if math.isnan(value) else value


def parse_translation_rows(column: str, rows: Sequence[Mapping[str, Any]]) -> Tuple[List[Record], int]:
    """Keep rows whose translated value resolves to text; returns (kept, dropped)."""
    kept: List[Record] = []
    dropped = 0
    for row in rows:
        row_index_key, sku_key, value_key = resolve_columns(list(row.keys()), column)
        value = row.get(value_key) if value_key is not None else None
        # Spreadsheet readers report blank cells as '' rather than leaving them out.
        if value is None or _text(value) == '':
            dropped += 1
            continue

        row_index = row.get(row_index_key) if row_index_key is not None else None
        sku = row.get(sku_key) if sku_key is not None else None
        kept.append({
            ROW_INDEX_FIELD: _text(row_index) if row_index not in (None, '') else DEFAULT_ROW_INDEX,
            SKU_FIELD: _text(sku),
            column: _text(value),
        })
    return kept, dropped


def build_translation_map(rows: Sequence[Mapping[str, Any]], column: str) -> TranslationMap:
    """SKU -> translated value; the last row for a SKU wins, empty SKUs are left out."""
    translation_map: TranslationMap = {}
    for row in rows:
        sku = _text(row.get(SKU_FIELD))
        if not sku:
            continue
        translation_map[sku] = _text(row.get(column))
    return translation_map


@dataclass(frozen=True)
class TranslationImport:
    column: str
    rows: Tuple[Record, ...]
    dropped: int
    files: int

    @property
    def translation_map(self) -> TranslationMap:
        return build_translation_map(self.rows, self.column)

    def summary(self) -> str:
        return (
            f"{self.column}: {len(self.rows)} rows from {self.files} file(s), "
            f"{self.dropped} dropped, {len(self.translation_map)} SKUs."
        )


def import_translations(column: str, files: Sequence[Sequence[Mapping[str, Any]]]) -> TranslationImport:
    """Collect translated rows for ``column`` from one or more parsed files.

    Rows from several files are ordered by numeric row index (stable). Raises
    EmptyTranslationError when no row survives.
    """
    files = list(files or [])
    rows: List[Record] = []
    dropped = 0
    for parsed in files:
        kept, skipped = parse_translation_rows(column, parsed or [])
        rows.extend(kept)
        dropped += skipped

    if dropped:
        logger.warning("translation_rows_dropped", column=column, dropped=dropped)

    if not rows:
        raise EmptyTranslationError(column, len(files), dropped)

    if len(files) > 1:
        rows.sort(key=row_index_sort_key)

    result = TranslationImport(column=column, rows=tuple(rows), dropped=dropped, files=len(files))
    logger.info("translations_imported", column=column, rows=len(rows), files=len(files), dropped=dropped)
    return result


def apply_translations(unified: Sequence[Mapping[str, Any]], maps: Mapping[str, Mapping[str, str]]) -> List[Record]:
    """Deep copy of ``unified`` with translated values substituted by SKU.

    Rows without a SKU, and SKUs missing from a column's map, keep their
    original value for that column.
    """
    final: List[Record] = deepcopy([dict(r) for r in unified])
    for record in final:
        sku = _text(record.get(SKU_FIELD))
        if not sku:
            continue
        for column, translation_map in maps.items():
            if sku in translation_map:
                record[column] = translation_map[sku]
    return final


def count_substitutions(unified: Sequence[Mapping[str, Any]], maps: Mapping[str, Mapping[str, str]]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for column, translation_map in maps.items():
        counts[column] = sum(
            1 for record in unified
            if _text(record.get(SKU_FIELD)) and _text(record.get(SKU_FIELD)) in translation_map
        )
    return counts
