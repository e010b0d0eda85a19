"""
Shared Rich console helpers for the CLI.
"""

from __future__ import annotations

from functools import lru_cache

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pagedeck.core.models import PipelineReport


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Return a shared stdout console instance."""
    return Console()


@lru_cache(maxsize=1)
def get_err_console() -> Console:
    """Return a shared stderr console instance."""
    return Console(stderr=True)


def status_label(label: str, style: str) -> Text:
    """Create a styled status label wrapped in brackets."""
    text = Text(f"[{label}]")
    text.stylize(style)
    return text


def report_table(report: PipelineReport) -> Table:
    table = Table(title=f"Presentation {report.presentation_id}")
    table.add_column("#", justify="right")
    table.add_column("Slide")
    table.add_column("Status")
    table.add_column("Variant / error")
    for outcome in report.outcomes:
        if outcome.ok:
            status = status_label("OK", "bold green")
            detail = outcome.variant_id or ""
        else:
            status = status_label("FAIL", "bold red")
            detail = f"{outcome.failed_step}: {outcome.error}"
        table.add_row(str(outcome.index), outcome.title, status, detail)
    return table
