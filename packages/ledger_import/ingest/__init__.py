"""Input side of the import pipeline: streaming row parsing and sanitization."""

from .rows import iter_raw_rows
from .sanitize import collect_rows, sanitize_row

__all__ = ["collect_rows", "iter_raw_rows", "sanitize_row"]
