"""Allow ``python -m ledger_import``."""

from .cli import app

app(prog_name="ledger-import")
