from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional
from .classify import classify_shots
from .errors import XrfReadError
from .export import CONFLICTING_SHEET, SUMMARY_SHEET, export_report_bytes
from .ingest import load_rows_from_upload
from .models import ClassificationPolicy, ProcessingResult, Shot, load_policy
from .report import (
    AVERAGED,
    CONFLICTING,
    UNIFORM,
    report_file_name,
    report_label,
    report_title,
    shots_to_frame,
    summaries_to_frame,
)
from .rows import read_shots

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedReport:
    report_type: str
    file_name: str
    title: str
    content: bytes


@dataclass
class ProcessingOutcome:
    """Result of one job: the classification plus the report workbooks built from it."""

    success: bool
    message: str
    reports: List[GeneratedReport] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    result: Optional[ProcessingResult] = None


def build_reports(
    result: ProcessingResult,
    file_type: str,
    job_number: str,
    timestamp: datetime,
) -> List[GeneratedReport]:
    # one workbook per non-empty bucket: averaged, uniform, conflicting
    reports: List[GeneratedReport] = []
    parts = [
        (AVERAGED, result.averaged, summaries_to_frame, SUMMARY_SHEET),
        (UNIFORM, result.uniform, summaries_to_frame, SUMMARY_SHEET),
        (CONFLICTING, result.conflicting, shots_to_frame, CONFLICTING_SHEET),
    ]
    for kind, items, to_frame, sheet in parts:
        if not items:
            continue
        title = report_title(kind, file_type)
        reports.append(GeneratedReport(
            report_type=report_label(kind),
            file_name=report_file_name(job_number, kind, timestamp),
            title=title,
            content=export_report_bytes(to_frame(items), title, sheet_name=sheet),
        ))
    return reports


def process_uploads(
    uploads: Iterable,
    file_type: str,
    job_number: str,
    policy: Optional[ClassificationPolicy] = None,
    now: Optional[datetime] = None,
) -> ProcessingOutcome:
    """
    Runs one job over already-downloaded inspection exports.

    uploads: objects with .name and .getvalue(); all their shots are pooled
    before classification. An upload that cannot be read is reported in
    `errors` and skipped, the others are still processed.
    """
    uploads = list(uploads or [])
    if not uploads:
        return ProcessingOutcome(success=False, message="No files selected.")

    policy = policy or load_policy()
    all_shots: List[Shot] = []
    errors: List[str] = []

    for up in uploads:
        logger.info("Processing file: %s", up.name)
        try:
            rows = load_rows_from_upload(up)
        except XrfReadError as e:
            logger.warning("Skipping unreadable file %s: %s", up.name, e)
            errors.append(str(e))
            continue
        all_shots.extend(read_shots(rows))

    result = classify_shots(all_shots, policy)
    reports = build_reports(result, file_type, job_number, now or datetime.now())

    logger.info(
        "Job %s: %d shots pooled, %d reports generated",
        job_number, len(all_shots), len(reports),
    )
    if errors and len(errors) == len(uploads):
        return ProcessingOutcome(
            success=False,
            message="None of the selected files could be read.",
            errors=errors,
            result=result,
        )
    return ProcessingOutcome(
        success=True,
        message="Processing completed successfully.",
        reports=reports,
        errors=errors,
        result=result,
    )
