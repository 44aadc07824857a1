from __future__ import annotations

import zipfile
from io import BytesIO
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

import pandas as pd
import structlog
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from .errors import UnsupportedFileTypeError
from .extraction import Batch
from .records import union_columns

logger = structlog.get_logger(__name__)

EXPORT_FORMATS = ('csv', 'xlsx')
DEFAULT_SHEET_NAME = 'Data'
# Excel keeps at most this many characters per cell.
XLSX_MAX_CELL_LENGTH = 32767


def records_to_frame(records: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """Frame over the union of record columns; missing cells become ''."""
    columns = union_columns(records)
    rows = [{column: ('' if record.get(column) is None else record.get(column)) for column in columns} for record in records]
    return pd.DataFrame(rows, columns=columns)


def records_to_csv_bytes(records: Sequence[Mapping[str, Any]]) -> bytes:
    # BOM so spreadsheet apps detect UTF-8.
    return records_to_frame(records).to_csv(index=False).encode('utf-8-sig')


def xlsx_cell(value: Any) -> Any:
    """Drop control characters that worksheets cannot store."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub('', value)
    return value


def records_to_xlsx_frame(records: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    frame = records_to_frame(records)
    for column in frame.columns:
        frame[column] = frame[column].map(xlsx_cell)

    too_long = sum(
        1 for column in frame.columns for value in frame[column]
        if isinstance(value, str) and len(value) > XLSX_MAX_CELL_LENGTH
    )
    if too_long:
        logger.warning("xlsx_cells_too_long", cells=too_long, limit=XLSX_MAX_CELL_LENGTH)
    return frame


def records_to_xlsx_bytes(records: Sequence[Mapping[str, Any]], sheet_name: str = DEFAULT_SHEET_NAME) -> bytes:
    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        records_to_xlsx_frame(records).to_excel(writer, sheet_name=sheet_name, index=False)
    return output.getvalue()


def export_records(records: Sequence[Mapping[str, Any]], fmt: str) -> Tuple[bytes, str]:
    """Serialize records; returns (payload, file extension)."""
    fmt = (fmt or '').strip().lower().lstrip('.')
    if fmt == 'csv':
        return records_to_csv_bytes(records), 'csv'
    if fmt == 'xlsx':
        return records_to_xlsx_bytes(records), 'xlsx'
    raise UnsupportedFileTypeError(fmt or '(none)', EXPORT_FORMATS)


def bundle_files(files: Mapping[str, bytes]) -> bytes:
    """Zip archive holding each ``filename -> payload`` entry."""
    output = BytesIO()
    with zipfile.ZipFile(output, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for name, payload in files.items():
            archive.writestr(name, payload)
    return output.getvalue()


def batches_to_bundle(batches: Iterable[Batch]) -> bytes:
    files: Dict[str, bytes] = {}
    for batch in batches:
        files[batch.filename] = records_to_xlsx_bytes(batch.rows, sheet_name=batch.column[:31])
    logger.info("batches_bundled", files=len(files))
    return bundle_files(files)
