from __future__ import annotations
import json
import math
import re
from pathlib import Path
from typing import Any, Optional

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PACKAGE_DIR / "data"

def load_json(path: Path, default: Any):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return default

def rules_path() -> Path:
    return DEFAULT_DATA_DIR / "rules.json"

_NBSP_RE = re.compile(r"[\u00A0\u2007\u202F]")  # NBSP variants
_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$")


def cell_text(v: Any) -> str:
    """
    Text of one spreadsheet cell:
    - None / NaN -> ""
    - integral floats without the fractional part (12.0 -> "12")
    - anything else as str()
    """
    if v is None:
        return ""
    if isinstance(v, bool):
        return str(v)
    if isinstance(v, float):
        if math.isnan(v):
            return ""
        if v.is_integer():
            return str(int(v))
    return str(v)


def norm_text(s: Any) -> str:
    """
    Normalization for headers and grouping keys:
    - BOM / non-breaking spaces
    - strip
    - casefold
    - collapse whitespace
    """
    if s is None:
        return ""

    s = str(s)
    s = s.replace("\ufeff", "")
    s = _NBSP_RE.sub(" ", s)
    s = s.strip().casefold()
    s = re.sub(r"\s+", " ", s)
    return s


def parse_int(s: Any) -> Optional[int]:
    # only plain digits with an optional sign, no thousands separators
    txt = cell_text(s).strip()
    if not _INT_RE.match(txt):
        return None
    return int(txt)


def parse_float(s: Any) -> Optional[float]:
    # '.' is the only decimal separator, inf/nan are rejected
    txt = cell_text(s).strip()
    if not _FLOAT_RE.match(txt):
        return None
    v = float(txt)
    if not math.isfinite(v):
        return None
    return v
