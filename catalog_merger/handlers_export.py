from __future__ import annotations

import os
import tempfile

import structlog

from .errors import CatalogMergerError
from .exporting import export_records

logger = structlog.get_logger(__name__)


def write_temp_file(file_name: str, payload: bytes) -> str:
    path = os.path.join(tempfile.gettempdir(), file_name)
    with open(path, 'wb') as f:
        f.write(payload)
    return path


def export_data_handler(records, output_format, file_name=None):
    if not records:
        return None, "No data to export."

    try:
        payload, ext = export_records(records, output_format)
    except CatalogMergerError as exc:
        return None, exc.message

    if not file_name or not file_name.strip():
        file_name = "data"
    file_name = file_name.strip()
    if not file_name.lower().endswith(f".{ext}"):
        file_name += f".{ext}"

    try:
        path = write_temp_file(file_name, payload)
    except OSError as exc:
        logger.error("export_failed", file=file_name, error=str(exc))
        return None, f"Error during export: {exc}"

    logger.info("records_exported", file=file_name, rows=len(records))
    return path, f"Exported {len(records)} rows to {file_name}."
