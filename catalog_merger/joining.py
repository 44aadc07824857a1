from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import structlog

from .fields import compose_both, compose_primary_only, compose_secondary_only
from .records import Record
from .sku import has_sku, normalize_sku, raw_sku

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class JoinStats:
    primary_total: int = 0
    secondary_total: int = 0
    primary_skipped: int = 0
    secondary_skipped: int = 0
    matched: int = 0
    primary_only: int = 0
    secondary_only: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def summary(self) -> str:
        return (
            f"Matches: {self.matched} | "
            f"Primary rows: {self.primary_total} (only in primary {self.primary_only}, "
            f"no SKU {self.primary_skipped}) | "
            f"Secondary rows: {self.secondary_total} (only in secondary {self.secondary_only}, "
            f"no SKU {self.secondary_skipped})."
        )


@dataclass(frozen=True)
class JoinResult:
    records: Tuple[Record, ...]
    stats: JoinStats


def build_sku_index(records: Sequence[Mapping[str, Any]]) -> Tuple[Dict[str, Mapping[str, Any]], int]:
    """Index records by normalized SKU.

    Later duplicates replace earlier ones but keep the key's first position.
    Records without a SKU are skipped; returns (index, skipped_count).
    """
    index: Dict[str, Mapping[str, Any]] = {}
    skipped = 0
    for record in records:
        if not has_sku(record):
            skipped += 1
            continue
        index[normalize_sku(raw_sku(record))] = record
    return index, skipped


def join_records(primary: Sequence[Mapping[str, Any]], secondary: Sequence[Mapping[str, Any]]) -> JoinResult:
    """Reconcile the primary and secondary datasets into one record per SKU.

    Output order: primary keys (matched or primary-only) in primary order,
    then unmatched secondary keys in secondary order.
    """
    primary = primary or []
    secondary = secondary or []

    primary_index, primary_skipped = build_sku_index(primary)
    secondary_index, secondary_skipped = build_sku_index(secondary)

    merged: List[Record] = []
    matched = 0
    primary_only = 0

    for key, primary_record in primary_index.items():
        secondary_record = secondary_index.pop(key, None)
        if secondary_record is not None:
            merged.append(compose_both(key, primary_record, secondary_record))
            matched += 1
        else:
            merged.append(compose_primary_only(key, primary_record))
            primary_only += 1

    for key, secondary_record in secondary_index.items():
        merged.append(compose_secondary_only(key, secondary_record))

    stats = JoinStats(
        primary_total=len(primary),
        secondary_total=len(secondary),
        primary_skipped=primary_skipped,
        secondary_skipped=secondary_skipped,
        matched=matched,
        primary_only=primary_only,
        secondary_only=len(secondary_index),
    )

    if primary_skipped or secondary_skipped:
        logger.warning(
            "records_without_sku_skipped",
            primary_skipped=primary_skipped,
            secondary_skipped=secondary_skipped,
        )
    logger.info("datasets_joined", unified=len(merged), **stats.to_dict())

    return JoinResult(records=tuple(merged), stats=stats)
