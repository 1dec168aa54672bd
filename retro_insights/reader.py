"""Decode spreadsheet and CSV exports into raw rows.

This is the only place that touches file bytes. Callers get back a list of
plain dictionaries keyed by header name, with empty cells as ``None``, or a
`DecodeError` with a message fit for end users.
"""

import importlib.util
import logging

import pandas as pd

from .exceptions import DecodeError
from .utils import get_extension

logger = logging.getLogger(__name__)

DECODE_FAILURE_MESSAGE = (
    "Failed to parse file. Ensure it is a valid Excel or CSV with "
    "appropriate columns."
)

# Extension -> (pandas engine, module that must be importable)
EXCEL_ENGINES = {
    ".xlsx": ("openpyxl", "openpyxl"),
    ".xlsm": ("openpyxl", "openpyxl"),
    ".xls": ("xlrd", "xlrd"),
}

SUPPORTED_EXTENSIONS = (".csv",) + tuple(EXCEL_ENGINES)


def decoder_ready(filename):
    """Whether the library needed to decode `filename` is installed."""
    extension = get_extension(filename or "")
    if extension not in EXCEL_ENGINES:
        return True
    _, module_name = EXCEL_ENGINES[extension]
    return importlib.util.find_spec(module_name) is not None


def read_rows(source, filename=None, sheet=None):
    """Read the rows of a CSV or Excel export.

    Args:
        source: Path or binary file-like object.
        filename: Name used to pick the decoder. Defaults to `source` when it
            is a path.
        sheet: Sheet name or index for Excel files. Defaults to the first
            sheet.

    Raises:
        DecodeError: If the decoder is unavailable or the content cannot be
            parsed.
    """
    if filename is None:
        filename = source if isinstance(source, str) else ""

    if not decoder_ready(filename):
        raise DecodeError(
            f"Support for {get_extension(filename)} files is not installed."
        )

    try:
        frame = _read_frame(source, filename, sheet)
    except Exception as e:
        logger.debug("Unable to decode %s", filename or "input", exc_info=True)
        raise DecodeError(DECODE_FAILURE_MESSAGE) from e

    rows = frame_to_rows(frame)
    logger.info("Read %d rows from %s", len(rows), filename or "input")
    return rows


def _read_frame(source, filename, sheet):
    extension = get_extension(filename)
    if extension in EXCEL_ENGINES:
        engine, _ = EXCEL_ENGINES[extension]
        return pd.read_excel(
            source,
            sheet_name=0 if sheet is None else sheet,
            engine=engine,
        )
    return pd.read_csv(source)


def frame_to_rows(frame):
    """Convert a decoded DataFrame into row dictionaries.

    Rows where every cell is empty are dropped and remaining empty cells
    become ``None``.
    """
    frame = frame.dropna(how="all")
    frame.columns = [str(column) for column in frame.columns]
    frame = frame.astype(object).where(pd.notna(frame), None)
    return frame.to_dict("records")
