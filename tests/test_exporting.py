"""
Tests for table export and batch bundling.
"""

import zipfile
from io import BytesIO

import pytest
from openpyxl import load_workbook

from catalog_merger.errors import UnsupportedFileTypeError
from catalog_merger.exporting import (
    XLSX_MAX_CELL_LENGTH,
    batches_to_bundle,
    bundle_files,
    export_records,
    records_to_csv_bytes,
    records_to_frame,
    records_to_xlsx_bytes,
    records_to_xlsx_frame,
    xlsx_cell,
)
from catalog_merger.extraction import extract_batches
from tests.factories import make_unified


class TestRecordsToFrame:
    """Column union."""

    def test_union_of_columns_in_first_seen_order(self):
        records = [{"SKU": "A", "Title": "t"}, {"SKU": "B", "image1": "u"}]

        frame = records_to_frame(records)

        assert list(frame.columns) == ["SKU", "Title", "image1"]
        assert frame.loc[1, "Title"] == ""
        assert frame.loc[0, "image1"] == ""

    def test_empty(self):
        assert records_to_frame([]).empty


class TestExport:
    """CSV and XLSX output."""

    def test_csv(self):
        payload = records_to_csv_bytes([{"SKU": "A", "Title": "Gerät"}])

        text = payload.decode("utf-8-sig")
        assert text.splitlines() == ["SKU,Title", "A,Gerät"]

    def test_xlsx(self):
        payload = records_to_xlsx_bytes([{"SKU": "A", "Title": "Widget"}])

        sheet = load_workbook(BytesIO(payload))["Data"]
        assert [c.value for c in sheet[1]] == ["SKU", "Title"]
        assert [c.value for c in sheet[2]] == ["A", "Widget"]

    @pytest.mark.parametrize("fmt,ext", [("CSV", "csv"), ("xlsx", "xlsx"), (".csv", "csv")])
    def test_export_records_formats(self, fmt, ext):
        _, extension = export_records([{"SKU": "A"}], fmt)
        assert extension == ext

    def test_export_records_rejects_unknown_format(self):
        with pytest.raises(UnsupportedFileTypeError):
            export_records([{"SKU": "A"}], "pdf")


class TestXlsxCells:
    """Worksheet cell clean-up."""

    def test_control_characters_are_removed(self):
        payload = records_to_xlsx_bytes([{"SKU": "A", "description": "line\x0bbreak\x00"}])

        sheet = load_workbook(BytesIO(payload))["Data"]
        assert sheet.cell(row=2, column=2).value == "linebreak"

    def test_tabs_and_newlines_are_kept(self):
        assert xlsx_cell("a\tb\nc") == "a\tb\nc"

    def test_non_text_values_untouched(self):
        assert xlsx_cell(600) == 600
        assert xlsx_cell(None) is None

    def test_csv_keeps_control_characters(self):
        payload = records_to_csv_bytes([{"SKU": "A", "description": "line\x0bbreak"}])
        assert "line\x0bbreak" in payload.decode("utf-8-sig")

    def test_overlong_cells_are_kept(self):
        value = "x" * (XLSX_MAX_CELL_LENGTH + 1)

        frame = records_to_xlsx_frame([{"SKU": "A", "description": value}])

        assert frame.loc[0, "description"] == value


class TestBundles:
    """Zip bundling."""

    def test_bundle_files(self):
        payload = bundle_files({"a.txt": b"one", "b.txt": b"two"})

        with zipfile.ZipFile(BytesIO(payload)) as archive:
            assert archive.namelist() == ["a.txt", "b.txt"]
            assert archive.read("b.txt") == b"two"

    def test_batches_to_bundle(self):
        batches = extract_batches(make_unified(650))
        all_batches = [b for items in batches.values() for b in items]

        payload = batches_to_bundle(all_batches)

        with zipfile.ZipFile(BytesIO(payload)) as archive:
            names = archive.namelist()
            assert "description_part2.xlsx" in names
            sheet = load_workbook(BytesIO(archive.read("description_part2.xlsx")))["description"]

        assert [c.value for c in sheet[1]] == ["row_index", "SKU", "description"]
        assert sheet.cell(row=2, column=1).value == 600
        assert sheet.max_row == 51
