"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import Workbook


def pytest_sessionstart() -> None:
    """Add the project root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


class FakeUpload:
    """Stand-in for a file uploader object (.name / .getvalue())."""

    def __init__(self, name: str, data: bytes) -> None:
        self.name = name
        self._data = data

    def getvalue(self) -> bytes:
        return self._data


def workbook_bytes(rows: list[list[object]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    bio = BytesIO()
    wb.save(bio)
    return bio.getvalue()


@pytest.fixture
def make_upload():
    def _make(name: str, rows: list[list[object]] | None = None, data: bytes | None = None) -> FakeUpload:
        if data is None:
            data = workbook_bytes(rows or [])
        return FakeUpload(name, data)

    return _make
