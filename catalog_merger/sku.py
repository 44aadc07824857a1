from __future__ import annotations

from typing import Any, Mapping

SKU_FIELD = 'SKU'
SKU_PREFIX = 'B34'
SKU_SUFFIX = 'V1'


def normalize_sku(raw: Any) -> str:
    """Canonical join key for a raw SKU.

    'B34ABC123V1' -> 'ABC123'
    ' b34abc123v1 ' -> 'abc123'
    'abc' -> 'abc'

    Malformed input degrades to a best-effort key; this never raises.
    """
    if raw is None:
        return ''
    if not isinstance(raw, str):
        raw = str(raw)

    normalized = raw.strip()
    if normalized[:len(SKU_PREFIX)].lower() == SKU_PREFIX.lower():
        normalized = normalized[len(SKU_PREFIX):]
    if len(normalized) >= len(SKU_SUFFIX) and normalized[-len(SKU_SUFFIX):].lower() == SKU_SUFFIX.lower():
        normalized = normalized[:-len(SKU_SUFFIX)]
    return normalized.strip()


def raw_sku(record: Mapping[str, Any]) -> str:
    value = record.get(SKU_FIELD)
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def has_sku(record: Mapping[str, Any]) -> bool:
    """True when the record carries a non-empty raw SKU cell.

    Whitespace-only identifiers count as present and normalize to ''.
    """
    return raw_sku(record) != ''
