from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable
import pandas as pd
from .models import ComponentSummary, Shot

AVERAGED = "averaged"
UNIFORM = "uniform"
CONFLICTING = "conflicting"
REPORT_KINDS = (AVERAGED, UNIFORM, CONFLICTING)

# downstream reports are matched on these titles, keep them verbatim
_TITLE_TEMPLATES: Dict[str, str] = {
    AVERAGED: "AVERAGED DWELLING {file_type} COMPONENT RESULTS",
    UNIFORM: "INDIVIDUALLY TESTED {file_type} COMPONENTS (UNIFORM RESULTS)",
    CONFLICTING: "INDIVIDUALLY TESTED {file_type} COMPONENTS (CONFLICTING RESULTS)",
}

_FILE_LABELS: Dict[str, str] = {
    AVERAGED: "Averaged",
    UNIFORM: "Uniform",
    CONFLICTING: "Conflicting",
}

SUMMARY_COLUMNS = ["Component", "Count", "Negative%", "Positive%", "Lead Content"]
SHOT_COLUMNS = [
    "Reading", "Component", "Side", "Color", "Substrate", "Condition",
    "Room Number", "Room Type", "Floor", "Result", "Pbc",
]


def _check_kind(kind: str) -> str:
    if kind not in REPORT_KINDS:
        raise ValueError(f"Unknown report kind {kind!r}, expected one of: {', '.join(REPORT_KINDS)}")
    return kind


def report_title(kind: str, file_type: str) -> str:
    # file_type: "Units" / "Common Areas"
    return _TITLE_TEMPLATES[_check_kind(kind)].format(file_type=(file_type or "").upper())


def report_label(kind: str) -> str:
    return _FILE_LABELS[_check_kind(kind)]


def report_file_name(job_number: str, kind: str, timestamp: datetime) -> str:
    return f"{job_number}_{report_label(kind)}_{timestamp.strftime('%Y%m%d_%H%M%S')}.xlsx"


def summaries_to_frame(summaries: Iterable[ComponentSummary]) -> pd.DataFrame:
    rows = [
        {
            "Component": s.component,
            "Count": s.count,
            "Negative%": s.negative_percentage,
            "Positive%": s.positive_percentage,
            "Lead Content": s.lead_content,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def shots_to_frame(shots: Iterable[Shot]) -> pd.DataFrame:
    rows = [
        {
            "Reading": s.reading,
            "Component": s.component_raw,
            "Side": s.side,
            "Color": s.color,
            "Substrate": s.substrate,
            "Condition": s.condition,
            "Room Number": s.room_number,
            "Room Type": s.room_type,
            "Floor": s.floor,
            "Result": s.result_text,
            "Pbc": s.measurement,
        }
        for s in shots
    ]
    return pd.DataFrame(rows, columns=SHOT_COLUMNS)
