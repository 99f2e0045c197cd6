from __future__ import annotations
import logging
from io import BytesIO, StringIO
from typing import Any, List, Optional
import pandas as pd
from openpyxl import load_workbook
from .errors import XrfReadError
from .utils import cell_text

logger = logging.getLogger(__name__)

CSV_SUFFIXES = (".csv", ".txt")
_DELIMITERS = (",", ";", "\t", "|")  # "," first: wins ties
# =========================

# Excel: first worksheet as a matrix of cell texts
# =========================
def _sheet_rows(wb_bytes: bytes) -> List[List[str]]:
    wb = load_workbook(BytesIO(wb_bytes), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return [[cell_text(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
# =========================

# CSV: device exports, delimiter and encoding vary
# =========================
def _decode_sample(data: bytes, enc: str, limit: int = 65536) -> str:
    try:
        return data[:limit].decode(enc, errors="replace")
    except LookupError:
        return data[:limit].decode("utf-8", errors="replace")


def _guess_delimiter(sample_text: str) -> str:
    """
    Delimiter of a device export, judged against its header line:
    the candidate found in the header that splits the most data lines
    into the same number of fields wins. Ties and headers without any
    candidate fall back to ',', the usual export format.
    """
    lines = [ln for ln in sample_text.splitlines() if ln.strip()][:50]
    if not lines:
        return ","

    header, data = lines[0], lines[1:]
    best, best_score = ",", (-1, -1)
    for d in _DELIMITERS:
        fields = header.count(d)
        if fields == 0:
            continue
        # a few over-long lines still leave the header count as the majority
        agree = sum(1 for ln in data if ln.count(d) == fields)
        score = (agree, fields)
        if score > best_score:
            best, best_score = d, score
    return best


def _read_csv_frame(source: Any, delim: str, encoding: Optional[str] = None) -> pd.DataFrame:
    # header=None: the header row stays a data row, header resolution happens later
    # lines with more fields than the header are dropped, the rest of the file is kept
    return pd.read_csv(
        source,
        header=None,
        sep=delim,
        engine="python",
        encoding=encoding,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="skip",
    )


def _read_csv_bytes(data: bytes) -> pd.DataFrame:
    encodings = ["utf-8-sig", "utf-8", "cp1251"]
    last_err: Exception | None = None

    for enc in encodings:
        try:
            sample = _decode_sample(data, enc)
            return _read_csv_frame(BytesIO(data), _guess_delimiter(sample), enc)
        except (UnicodeDecodeError, pd.errors.ParserError) as e:
            last_err = e
            continue

    sample = data.decode("utf-8", errors="replace")
    try:
        return _read_csv_frame(StringIO(sample), _guess_delimiter(sample[:65536]))
    except pd.errors.ParserError as e:
        raise last_err or e


def _frame_rows(df: pd.DataFrame) -> List[List[str]]:
    return [[cell_text(v) for v in row] for row in df.itertuples(index=False, name=None)]
# =========================

# Main: upload -> rows
# =========================
def load_rows_from_bytes(name: str, data: bytes) -> List[List[str]]:
    """
    Reads one inspection export into rows of cell texts.
    The first row is expected to be the header row; nothing is interpreted here.
    Raises XrfReadError if the content cannot be read as a table.
    """
    low = (name or "").lower()
    try:
        if low.endswith(CSV_SUFFIXES):
            if not data.strip():
                return []
            rows = _frame_rows(_read_csv_bytes(data))
        else:
            rows = _sheet_rows(data)
    except Exception as e:
        raise XrfReadError(f"{name}: {type(e).__name__}: {e}") from e

    logger.debug("Read %d rows from %s", len(rows), name)
    return rows


def load_rows_from_upload(upload) -> List[List[str]]:
    # upload: any object with .name and .getvalue() (file uploader objects)
    return load_rows_from_bytes(upload.name, upload.getvalue())
