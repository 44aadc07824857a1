from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import structlog

from .config import get_settings
from .errors import CatalogMergerError
from .exporting import batches_to_bundle
from .extraction import TRANSLATABLE_COLUMNS, extract_batches, iter_batches
from .handlers_export import write_temp_file
from .io_utils import read_records
from .records import preview_records
from .translations import TranslationImport, apply_translations, count_substitutions, import_translations

logger = structlog.get_logger(__name__)

BUNDLE_NAME = "translation_batches.zip"


def _as_list(file_objs) -> List:
    if file_objs is None:
        return []
    if isinstance(file_objs, (list, tuple)):
        return [f for f in file_objs if f is not None]
    return [file_objs]


def extract_batches_handler(unified):
    if not unified:
        return None, "Merge the datasets before extracting batches."

    try:
        batches = extract_batches(unified)
    except CatalogMergerError as exc:
        return None, exc.message

    all_batches = iter_batches(batches)
    try:
        path = write_temp_file(BUNDLE_NAME, batches_to_bundle(all_batches))
    except OSError as exc:
        return None, f"Error writing batches: {exc}"

    parts = ", ".join(f"{column} ({len(items)})" for column, items in batches.items())
    return path, f"Extracted {len(all_batches)} batch files for {len(unified)} rows: {parts}."


def import_translation_files(column: str, file_objs) -> TranslationImport:
    """Parse uploaded files and import them for one column."""
    parsed = [read_records(f) for f in _as_list(file_objs)]
    return import_translations(column, parsed)


def apply_translations_handler(unified, *column_files: Optional[Sequence], columns: Sequence[str] = TRANSLATABLE_COLUMNS):
    """Import every column that has uploads, then build the final data set.

    ``column_files`` lines up with ``columns``. Any failing import stops the
    whole step.
    """
    if not unified:
        return None, "Merge the datasets before applying translations.", None

    imports: Dict[str, TranslationImport] = {}
    for column, file_objs in zip(columns, column_files):
        if not _as_list(file_objs):
            continue
        try:
            imports[column] = import_translation_files(column, file_objs)
        except CatalogMergerError as exc:
            return None, f"{column}: {exc.message}", None

    if not imports:
        return None, "Upload translated files for at least one column.", None

    maps = {column: result.translation_map for column, result in imports.items()}
    final = apply_translations(unified, maps)
    substitutions = count_substitutions(unified, maps)
    logger.info("translations_applied", rows=len(final), substitutions=substitutions)

    lines = [result.summary() for result in imports.values()]
    lines.append("Updated cells: " + ", ".join(f"{c} {n}" for c, n in substitutions.items()))
    return final, "\n".join(lines), preview_records(final, get_settings().preview_rows)
