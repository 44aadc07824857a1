from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

Record = Dict[str, str]


def cell(record: Optional[Mapping[str, Any]], key: str) -> str:
    """String value of ``record[key]``; missing or None cells read as ''."""
    if record is None:
        return ''
    value = record.get(key)
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def as_record(row: Mapping[Any, Any]) -> Record:
    """Coerce a parsed row into a Record with string keys and values."""
    return {str(k): cell(row, k) for k in row.keys()}


def record_columns(records: Sequence[Mapping[str, Any]]) -> List[str]:
    """Columns of a dataset, discovered from its first record."""
    if not records:
        return []
    return list(records[0].keys())


def union_columns(records: Iterable[Mapping[str, Any]]) -> List[str]:
    """All columns across records in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        for key in record.keys():
            seen.setdefault(key, None)
    return list(seen)


def preview_records(records: Optional[Sequence[Mapping[str, Any]]], limit: int = 3) -> List[Record]:
    if not records:
        return []
    return [as_record(r) for r in records[:max(1, int(limit))]]
