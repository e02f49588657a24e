"""Runtime settings for the import pipeline.

Settings are explicit arguments first; :meth:`ImportSettings.from_env` fills
them from ``LEDGER_IMPORT_*`` environment variables for the CLI. The database
URL is not part of these settings: ``db.client`` resolves it from
``DATABASE_URL`` (or an explicit override).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}


class ImportSettings(BaseModel):
    """Parser and file-lifecycle settings for one import run.

    Attributes
    ----------
    from_line:
        1-based physical line where data starts. ``2`` skips one header line.
    encoding:
        Text encoding used to decode the input byte stream.
    keep_source_file:
        When True the input file is left in place after a successful import.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    from_line: int = 2
    encoding: str = "utf-8"
    keep_source_file: bool = False

    @field_validator("from_line")
    @classmethod
    def _from_line_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("from_line must be >= 1")
        return v

    @field_validator("encoding")
    @classmethod
    def _encoding_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("encoding must be non-empty")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ImportSettings:
        """Build settings from ``LEDGER_IMPORT_*`` variables, ignoring unset ones."""

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        from_line = env.get("LEDGER_IMPORT_FROM_LINE")
        if from_line:
            values["from_line"] = from_line
        encoding = env.get("LEDGER_IMPORT_ENCODING")
        if encoding:
            values["encoding"] = encoding
        keep = env.get("LEDGER_IMPORT_KEEP_SOURCE")
        if keep is not None:
            v = keep.strip().lower()
            if v in _TRUE:
                values["keep_source_file"] = True
            elif v in _FALSE:
                values["keep_source_file"] = False
            else:
                raise ValueError(
                    f"LEDGER_IMPORT_KEEP_SOURCE must be one of 1/true/yes/0/false/no, got {keep!r}"
                )
        return cls.model_validate(values)


__all__ = ["ImportSettings"]
