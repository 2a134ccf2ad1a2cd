from __future__ import annotations

from .rich_console import RichConsoleReporter

__all__ = ["RichConsoleReporter"]
