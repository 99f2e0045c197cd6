from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from .models import Shot
from .utils import cell_text, norm_text, parse_float, parse_int

# canonical Shot field -> accepted header texts (already normalized)
FIELD_ALIASES: Mapping[str, tuple] = MappingProxyType({
    "reading": ("reading", "shot #", "shot"),
    "component_raw": ("component",),
    "side": ("side",),
    "color": ("color",),
    "substrate": ("substrate", "subtrate"),  # misspelled in some device exports
    "condition": ("condition",),
    "room_number": ("room number",),
    "room_type": ("room type",),
    "floor": ("floor",),
    "result_text": ("result",),
    "measurement": ("pbc", "pb", "lead", "pb mg/cm2"),
})

_TEXT_FIELDS = [f for f in FIELD_ALIASES if f not in ("reading", "measurement")]


@dataclass(frozen=True)
class ColumnMap:
    """Canonical field -> 0-based column position, resolved once per file."""

    positions: Mapping[str, int]

    def get(self, field: str) -> Optional[int]:
        return self.positions.get(field)

    def __contains__(self, field: str) -> bool:
        return field in self.positions


@dataclass(frozen=True)
class RowParse:
    shot: Optional[Shot] = None

    @property
    def ok(self) -> bool:
        return self.shot is not None


_FAILED = RowParse()


def resolve_columns(header_row: Sequence[Any]) -> ColumnMap:
    # header text -> leftmost column with that text
    header_index: Dict[str, int] = {}
    for idx, header in enumerate(header_row):
        header_index.setdefault(norm_text(cell_text(header)), idx)

    # alias order decides, not column order: "pbc" beats "lead" wherever it sits
    positions: Dict[str, int] = {}
    for field, aliases in FIELD_ALIASES.items():
        for a in aliases:
            if a in header_index:
                positions[field] = header_index[a]
                break
    return ColumnMap(positions=MappingProxyType(positions))


def _is_row(row: Any) -> bool:
    return isinstance(row, Sequence) and not isinstance(row, (str, bytes))


def _is_blank(row: Sequence[Any]) -> bool:
    return all(not cell_text(v).strip() for v in row)


def parse_row(row: Sequence[Any], columns: ColumnMap) -> RowParse:
    """
    Builds a Shot from one data row.
    Unparsable numbers become 0; a mapped column missing from the row
    fails the whole row (no partial Shot).
    """
    if not _is_row(row):
        return _FAILED

    values: Dict[str, str] = {}
    for field in FIELD_ALIASES:
        idx = columns.get(field)
        if idx is None:
            values[field] = ""
            continue
        if idx >= len(row):
            return _FAILED
        values[field] = cell_text(row[idx])

    reading = parse_int(values["reading"])
    measurement = parse_float(values["measurement"])

    shot = Shot(
        reading=0 if reading is None else reading,
        measurement=0.0 if measurement is None else measurement,
        **{f: values[f] for f in _TEXT_FIELDS},
    )
    return RowParse(shot=shot)


def read_shots(rows: Iterable[Sequence[Any]]) -> List[Shot]:
    """
    The first row is the header row, the rest are data rows.
    Returns one Shot per data row that parses, in row order;
    failed and fully blank rows are dropped without a trace.
    """
    rows = list(rows)
    if not rows or not _is_row(rows[0]):
        return []

    columns = resolve_columns(rows[0])
    shots: List[Shot] = []
    for row in rows[1:]:
        if _is_row(row) and _is_blank(row):
            continue
        parsed = parse_row(row, columns)
        if parsed.ok:
            shots.append(parsed.shot)
    return shots
