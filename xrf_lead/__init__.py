"""
XRF lead-paint inspection processing:
- reading inspection exports (XLSX/CSV) into rows
- tolerant row -> Shot ingestion
- averaged / uniform / conflicting classification
- report workbooks
"""
from .models import (
    ClassificationPolicy,
    ComponentSummary,
    DEFAULT_POLICY,
    ProcessingResult,
    Shot,
    load_policy,
)
from .rows import FIELD_ALIASES, parse_row, read_shots, resolve_columns
from .classify import classify_shots, summarize_component
from .ingest import load_rows_from_bytes, load_rows_from_upload
from .report import report_file_name, report_title, shots_to_frame, summaries_to_frame
from .export import export_report_bytes
from .pipeline import GeneratedReport, ProcessingOutcome, build_reports, process_uploads
from .errors import XrfError, XrfReadError

__all__ = [
    "ClassificationPolicy",
    "ComponentSummary",
    "DEFAULT_POLICY",
    "ProcessingResult",
    "Shot",
    "load_policy",
    "FIELD_ALIASES",
    "parse_row",
    "read_shots",
    "resolve_columns",
    "classify_shots",
    "summarize_component",
    "load_rows_from_bytes",
    "load_rows_from_upload",
    "report_file_name",
    "report_title",
    "shots_to_frame",
    "summaries_to_frame",
    "export_report_bytes",
    "GeneratedReport",
    "ProcessingOutcome",
    "build_reports",
    "process_uploads",
    "XrfError",
    "XrfReadError",
]
