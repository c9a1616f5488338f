"""
Workbook serialization.

Writes a census table (a 2-D list of cells) to a single-sheet xlsx
buffer with fixed column width hints.
"""

import io
import logging
from typing import List, Optional, Sequence

import pandas as pd
from openpyxl.utils import get_column_letter

from .models import Cell, COLUMN_WIDTHS, SHEET_NAME

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def table_to_dataframe(rows: List[List[Cell]]) -> pd.DataFrame:
    """
    Convert a ragged table to a rectangular DataFrame.

    Short rows are padded with None so decorative rows stay blank.
    """
    width = max((len(r) for r in rows), default=0)
    padded = [list(r) + [None] * (width - len(r)) for r in rows]
    return pd.DataFrame(padded, dtype=object)


def write_workbook(
    rows: List[List[Cell]],
    column_widths: Optional[Sequence[int]] = None,
    sheet_name: str = SHEET_NAME
) -> bytes:
    """
    Serialize a table to an xlsx workbook.

    Args:
        rows: Table rows, written verbatim starting at A1 (no index/header)
        column_widths: Width hints in characters for the leading columns
        sheet_name: Name of the single sheet

    Returns:
        Workbook bytes
    """
    if column_widths is None:
        column_widths = COLUMN_WIDTHS

    df = table_to_dataframe(rows)
    buffer = io.BytesIO()

    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False, header=False)
        worksheet = writer.sheets[sheet_name]
        for i, width in enumerate(column_widths, start=1):
            worksheet.column_dimensions[get_column_letter(i)].width = width

    data = buffer.getvalue()
    logger.debug(f"Wrote workbook: {len(rows)} rows, {len(data):,} bytes")
    return data
