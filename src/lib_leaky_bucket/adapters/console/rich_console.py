"""Rich-powered reporter implementing :class:`DecisionReporterPort`.

Purpose
-------
Render admission decisions and bucket levels for operators watching a
terminal.

Contents
--------
* :data:`_STYLE_MAP` - default outcome-to-style mapping.
* :class:`RichConsoleReporter` - adapter used by the runtime and the CLI.

System Role
-----------
Human-facing sink; purely presentational, it never feeds anything back into
the limiter.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lib_leaky_bucket.application.ports.reporter import DecisionReporterPort
from lib_leaky_bucket.domain import AdmissionDecision, LimiterState


#: Default Rich styles keyed by decision outcome.
_STYLE_MAP: Mapping[str, str] = {
    "allowed": "green",
    "denied": "bold red",
}


class RichConsoleReporter(DecisionReporterPort):
    """Print one line per decision and tabulate bucket levels on request."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[str, str] | None = None,
    ) -> None:
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=True if force_color else None, no_color=no_color)
        self._no_color = no_color
        self._style_map = {**_STYLE_MAP, **(styles or {})}

    def report(self, decision: AdmissionDecision) -> None:
        """Print ``decision`` styled by its outcome.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> reporter = RichConsoleReporter(console=console)
        >>> reporter.report(AdmissionDecision('u1', False, 3.0, 5.0, 2.0, 2))
        >>> 'DENIED' in console.export_text()
        True
        """
        outcome = "allowed" if decision.allowed else "denied"
        style = "" if self._no_color else self._style_map.get(outcome, "")
        self._console.print(self._format_line(decision), style=style, highlight=False, markup=False)

    @staticmethod
    def _format_line(decision: AdmissionDecision) -> str:
        """Return a single console line for ``decision``.

        Examples
        --------
        >>> RichConsoleReporter._format_line(AdmissionDecision('u1', True, 1.0, 1.0, 1.0, 5))
        't=1.000 u1 ALLOWED level=1.000/5'
        """
        verdict = "ALLOWED" if decision.allowed else "DENIED"
        line = f"t={decision.requested_at:.3f} {decision.identity} {verdict} level={decision.level:.3f}/{decision.capacity}"
        if decision.clamped:
            line += f" (clamped to t={decision.effective_time:.3f})"
        return line

    def render_buckets(self, state: LimiterState, *, title: str | None = None) -> None:
        """Print a table with every stored bucket of ``state``."""
        table = Table(title=title or f"capacity={state.capacity} leak_rate={state.leak_rate:g}")
        table.add_column("identity")
        table.add_column("level", justify="right")
        table.add_column("headroom", justify="right")
        table.add_column("last update", justify="right")
        for identity in sorted(state.identities):
            bucket = state.buckets[identity]
            table.add_row(
                escape(identity),
                f"{bucket.level:.3f}",
                f"{state.capacity - bucket.level:.3f}",
                f"{bucket.last_update_time:.3f}",
            )
        self._console.print(table)


__all__ = ["RichConsoleReporter"]
