"""
Tests for workbook serialization and artifact delivery.
"""

import io

from openpyxl import load_workbook

from census.delivery import DirectoryDelivery, MemoryDelivery, dedupe_filename
from census.models import COLUMN_HEADERS, COLUMN_WIDTHS, SHEET_NAME, TITLE
from census.pipeline import GenerationRequest
from census.workbook import write_workbook, table_to_dataframe


def _read(data: bytes):
    return load_workbook(io.BytesIO(data))


def test_table_to_dataframe_pads_rows():
    df = table_to_dataframe([[""], ["", "title"], ["a", "b", "c"]])
    assert df.shape == (3, 3)
    assert df.iloc[0, 2] is None


def test_workbook_layout(generator):
    """Single sheet named Worksheet, title in B2, headers in row 5"""
    batch = generator.generate_batch(GenerationRequest.create(1, 2, "Employee + Spouse"))
    table = generator.build_table(batch.sheets[0])
    
    workbook = _read(write_workbook(table))
    
    assert workbook.sheetnames == [SHEET_NAME]
    ws = workbook[SHEET_NAME]
    assert ws["B2"].value == TITLE
    assert ws["B1"].value in (None, "")
    header = [c.value for c in ws[5]][1:24]
    assert header == COLUMN_HEADERS
    assert ws.max_row == 5 + 4


def test_workbook_cell_types(generator):
    """Ages and incomes stay numeric; IDs and zip codes stay text"""
    batch = generator.generate_batch(GenerationRequest.create(1, 1, "Employee Only"))
    ws = _read(write_workbook(generator.build_table(batch.sheets[0])))[SHEET_NAME]
    
    row = {h: c.value for h, c in zip(COLUMN_HEADERS, list(ws[6])[1:])}
    assert isinstance(row["Age"], int)
    assert isinstance(row["Annual Household Income"], int)
    assert isinstance(row["EE ID"], str) and len(row["EE ID"]) == 6
    assert row["Zip Code"] == "06106"


def test_workbook_column_widths():
    ws = _read(write_workbook([["", "x"]]))[SHEET_NAME]
    assert ws.column_dimensions["A"].width == COLUMN_WIDTHS[0]
    assert ws.column_dimensions["E"].width == 30
    assert ws.column_dimensions["S"].width == COLUMN_WIDTHS[18]


def test_dedupe_filename():
    taken = {"a.xlsx", "a (1).xlsx"}
    assert dedupe_filename("b.xlsx", taken.__contains__) == "b.xlsx"
    assert dedupe_filename("a.xlsx", taken.__contains__) == "a (2).xlsx"
    assert dedupe_filename("noext", {"noext"}.__contains__) == "noext (1)"


def test_directory_delivery_never_overwrites(tmp_path):
    delivery = DirectoryDelivery(tmp_path / "out")
    first = delivery.deliver(b"one", "CensusFile_1.xlsx")
    second = delivery.deliver(b"two", "CensusFile_1.xlsx")
    
    assert first.endswith("CensusFile_1.xlsx")
    assert second.endswith("CensusFile_1 (1).xlsx")
    assert (tmp_path / "out" / "CensusFile_1.xlsx").read_bytes() == b"one"
    assert (tmp_path / "out" / "CensusFile_1 (1).xlsx").read_bytes() == b"two"


def test_memory_delivery():
    delivery = MemoryDelivery()
    delivery.deliver(b"1", "f.xlsx")
    delivery.deliver(b"2", "f.xlsx")
    assert delivery.as_dict() == {"f.xlsx": b"1", "f (1).xlsx": b"2"}
