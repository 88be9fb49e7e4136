"""Console output helpers.

Provides the shared Rich console, verbose-mode flag, and ErrorRenderer for
helpful "why / how to fix" error panels.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from regref.core.exceptions import get_error_info, get_root_cause

# Shared console instance
_console: Console | None = None

# Verbose mode flag (set by CLI --verbose flag)
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared console instance (lazy-loaded)."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable verbose mode (full tracebacks in error panels)."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def tip(message: str) -> None:
    """Display a tip message in dim styling."""
    get_console().print(f"  [dim]Tip: {message}[/dim]")


def success(message: str) -> None:
    get_console().print(f"[green]{message}[/green]")


class ErrorRenderer:
    """Renders errors as panels with "Why" and "How to fix" sections.

    Example
    -------
        try:
            build_index(config)
        except RegRefError as e:
            ErrorRenderer.render(e)
            raise typer.Exit(1)
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as a helpful error panel.

        Args:
            exc: Exception to render
            context: Optional context message (e.g., "While analyzing doc.pdf")
            show_traceback: Override for verbose mode (None = use global setting)
        """
        error_info = get_error_info(exc)

        root_cause = get_root_cause(exc)
        root_message = str(root_cause) if root_cause is not exc else None

        content = ErrorRenderer._build_error_content(
            message=str(exc),
            context=context,
            why=error_info["why_it_happened"],
            how_to_fix=error_info["how_to_fix"],
            root_message=root_message,
        )
        panel = Panel(
            content,
            title=f"[bold red]Error: {error_info['error_code']}[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
        get_console().print(panel)

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            ErrorRenderer._render_traceback(exc)

    @staticmethod
    def _build_error_content(
        message: str,
        context: str,
        why: str,
        how_to_fix: List[str],
        root_message: Optional[str],
    ) -> Text:
        """Build the error panel content."""
        text = Text()

        if context:
            text.append(f"{context}\n", style="dim")
            text.append("\n")

        text.append(message, style="bold red")
        text.append("\n\n")

        if root_message and root_message != message:
            text.append("Root cause: ", style="bold yellow")
            text.append(root_message, style="yellow")
            text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n", style="cyan")
        text.append("\n")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text

    @staticmethod
    def _render_traceback(exc: BaseException) -> None:
        console = get_console()
        console.print()
        console.print("[dim]--- Traceback (--verbose mode) ---[/dim]")
        tb_text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        console.print(tb_text, style="dim", markup=False, highlight=False)

    @staticmethod
    def render_simple(message: str, error_code: str = "RR-ERR-000") -> None:
        """Render a simple error message without an exception."""
        panel = Panel(
            Text(message, style="bold red"),
            title=f"[bold red]Error: {error_code}[/bold red]",
            border_style="red",
            padding=(0, 2),
        )
        get_console().print(panel)
