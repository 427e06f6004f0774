"""
Simple terminal pretty-printer for the scqkit driver (uv-style, clean look).

- Rich for styling; status goes to stderr so stdout carries only results.
- Left-aligned, compact section dividers.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class TerminalPrinter:
    """Pretty printer with Rich + uv-style status lines."""

    _LEVEL_STYLE = {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }

    _DIV_CHAR = "─"
    _DIV_WIDTH = 28  # short divider, left-aligned

    # Backend record fields worth a column when present
    _BACKEND_COLUMNS = ("system_id", "qubit_num", "status")

    def __init__(self, enable_color: Optional[bool] = None, out: Optional[Console] = None):
        if enable_color is None:
            enable_color = _isatty(sys.stderr) and os.getenv("NO_COLOR") is None
        self.enable_color = enable_color

        self.console = Console(stderr=True, soft_wrap=False, highlight=False, no_color=not enable_color)
        # Results go to stdout so they can be piped
        self.out = out or Console(soft_wrap=True, highlight=False)

    # ---------- helpers ----------

    def _tag(self, level: str) -> str:
        level = (level or "info").lower()
        style = self._LEVEL_STYLE.get(level, "cyan")
        return f"[bold {style}][{level.upper()}][/bold {style}]"

    def _mark_console(self, kind: str) -> str:
        if kind == "success":
            return "[green]✓[/]"
        if kind == "error":
            return "[red]✗[/]"
        if kind == "warning":
            return "[yellow]![/]"
        return "[cyan]•[/]"

    def _divider(self) -> str:
        return f"[bright_black]{self._DIV_CHAR * self._DIV_WIDTH}[/bright_black]"

    def _section(self, title: str) -> None:
        self.console.print(f"[bold]{title}[/]")
        self.console.print(self._divider())

    # ---------- public ----------

    def print_status(self, message: str, level: str = "info") -> None:
        level = (level or "info").lower()
        if level in ("info", "success"):
            self.console.print(f"{self._mark_console(level)} {escape(message)}")
        else:
            self.console.print(f"{self._tag(level)} {escape(message)}")

    def print_error(self, message: str) -> None:
        self.console.print(f"{self._mark_console('error')} {escape(message)}")

    def print_backends(self, backends: Mapping[str, Mapping[str, Any]], selected: Optional[str] = None) -> None:
        """Render the discovered backend catalog as a compact table."""
        if not backends:
            self.print_status("no backends discovered", level="warning")
            return
        columns = [c for c in self._BACKEND_COLUMNS if any(c in rec for rec in backends.values())]
        table = Table(show_edge=False, box=None, pad_edge=False)
        table.add_column("backend", style="bold")
        for col in columns:
            table.add_column(col)
        for name in sorted(backends):
            record = backends[name]
            label = f"{escape(name)} [green]*[/]" if name == selected else escape(name)
            table.add_row(label, *(escape(str(record.get(col, ""))) for col in columns))
        self._section("Backends")
        self.console.print(table)

    def print_summary(self, details: Dict[str, Any]) -> None:
        parts = [f"{k}={v}" for k, v in details.items() if v is not None]
        if parts:
            self.console.print("[bold]Task:[/] " + ", ".join(parts))

    def print_result(self, text: str) -> None:
        """Write the raw server response to stdout."""
        self.out.print(text, markup=False)
