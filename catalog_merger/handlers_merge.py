from __future__ import annotations

from typing import Any, List, Optional

import structlog

from .config import get_settings
from .errors import CatalogMergerError
from .io_utils import file_extension, file_name, file_size, read_records
from .joining import join_records
from .records import Record, preview_records, record_columns
from .storage import Slot, SlotStore, StoredFile, get_store

logger = structlog.get_logger(__name__)

PRIMARY_LABEL = "Primary dataset"
SECONDARY_LABEL = "Secondary dataset"
MERGED_LABEL = "Merged data"


def describe_dataset(label_prefix: str, name: str, records: Optional[List[Record]]) -> str:
    records = records or []
    return f"{label_prefix}: {name} ({len(records)} rows, {len(record_columns(records))} columns)."


def handle_dataset_upload(file_obj, slot: Slot, label_prefix: str, store: Optional[SlotStore] = None):
    if file_obj is None:
        return None, f"{label_prefix}: No file uploaded."

    name = file_name(file_obj)
    try:
        records = read_records(file_obj)
    except CatalogMergerError as exc:
        logger.warning("upload_rejected", slot=slot.value, file=name, code=exc.code)
        return None, f"{label_prefix}: {exc.message}"

    store = store or get_store()
    try:
        store.save(StoredFile(slot=slot, name=name, type=file_extension(name), size=file_size(file_obj), content=records))
    except CatalogMergerError as exc:
        return records, f"{describe_dataset(label_prefix, name, records)} Not saved: {exc.message}"

    return records, describe_dataset(label_prefix, name, records)


def handle_primary_dataset_upload(file_obj, store: Optional[SlotStore] = None):
    return handle_dataset_upload(file_obj, Slot.PRIMARY, PRIMARY_LABEL, store)


def handle_secondary_dataset_upload(file_obj, store: Optional[SlotStore] = None):
    return handle_dataset_upload(file_obj, Slot.SECONDARY, SECONDARY_LABEL, store)


def merge_datasets_handler(primary_records, secondary_records, store: Optional[SlotStore] = None):
    if not primary_records or not secondary_records:
        return None, "Upload both datasets before merging.", None

    result = join_records(primary_records, secondary_records)
    unified = list(result.records)
    if not unified:
        return None, "Merge produced no rows.", None

    summary = result.stats.summary()
    store = store or get_store()
    try:
        store.save(StoredFile(slot=Slot.MERGED, name=MERGED_LABEL, type='json', size=len(unified), content=unified))
    except CatalogMergerError as exc:
        summary = f"{summary} Not saved: {exc.message}"

    return unified, summary, preview_records(unified, get_settings().preview_rows)


def restore_saved_state(store: Optional[SlotStore] = None):
    """Reload saved slots: (primary, secondary, unified, statuses..., preview)."""
    store = store or get_store()
    restored: List[Any] = []
    statuses: List[str] = []
    for slot, label in ((Slot.PRIMARY, PRIMARY_LABEL), (Slot.SECONDARY, SECONDARY_LABEL), (Slot.MERGED, MERGED_LABEL)):
        try:
            stored = store.load(slot)
        except CatalogMergerError as exc:
            logger.warning("slot_restore_failed", slot=slot.value, code=exc.code)
            stored = None
        if stored is None or stored.content is None:
            restored.append(None)
            statuses.append("")
            continue
        restored.append(stored.content)
        statuses.append(f"{describe_dataset(label, stored.name, stored.content)} (restored)")

    unified = restored[2]
    return (*restored, *statuses, preview_records(unified, get_settings().preview_rows) or None)


def clear_datasets_handler(store: Optional[SlotStore] = None):
    store = store or get_store()
    try:
        store.clear()
    except CatalogMergerError as exc:
        return None, None, None, "", "", f"Clear failed: {exc.message}", None
    return None, None, None, "", "", "Cleared saved files.", None
