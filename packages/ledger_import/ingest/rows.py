"""Streaming reader for transaction import files.

Expected layout (no dialect detection)::

    title,type,value,category
    Lunch,outcome,45.00,Food

The first line is a header and is skipped by default. Records are pulled one
at a time from the underlying byte stream, so memory use is bounded by the
largest record rather than the file.

Failure mode
------------
Malformed records (bad quoting, wrong field count) raise ``csv.Error`` with
the offending line number; undecodable bytes raise ``UnicodeDecodeError``.
Both abort the import; there is no per-row recovery at this stage.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterator
from typing import BinaryIO

from ..models import RawRow

# Fixed column order: title, type, value, category
FIELD_COUNT = 4


def _is_blank(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


def iter_raw_rows(
    stream: BinaryIO,
    *,
    from_line: int = 2,
    encoding: str = "utf-8",
) -> Iterator[RawRow]:
    """Yield :class:`RawRow` records from ``stream`` lazily.

    Parameters
    ----------
    stream:
        A readable binary stream positioned at the start of the file. It is
        not closed by this function.
    from_line:
        1-based physical line number where data starts. Records that start on
        an earlier line are skipped; the default ``2`` skips one header line.
    encoding:
        Text encoding of the stream.

    The returned iterator is single-pass. Blank lines produce no record.
    """

    if from_line < 1:
        raise ValueError("from_line must be >= 1")

    text = io.TextIOWrapper(stream, encoding=encoding, newline="")
    try:
        reader = csv.reader(text, strict=True)
        next_start = 1
        while True:
            start = next_start
            try:
                record = next(reader)
            except StopIteration:
                return
            except csv.Error as err:
                raise csv.Error(f"line {start}: malformed record: {err}") from err
            # A quoted field may span several physical lines.
            next_start = reader.line_num + 1

            if start < from_line or _is_blank(record):
                continue
            if len(record) != FIELD_COUNT:
                raise csv.Error(
                    f"line {start}: expected {FIELD_COUNT} fields "
                    f"(title, type, value, category), got {len(record)}"
                )
            title, type_, value, category = record
            yield RawRow(title, type_, value, category, line=start)
    finally:
        # Leave the caller's stream open; the caller owns its lifecycle.
        text.detach()


__all__ = ["FIELD_COUNT", "iter_raw_rows"]
