from __future__ import annotations


class XrfError(Exception):
    """Base error for XRF report processing."""


class XrfReadError(XrfError):
    """An uploaded inspection export could not be read as a table."""
