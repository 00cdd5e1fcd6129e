"""Rich Console wrapper that keeps registry output readable on any terminal.

Unicode glyphs in strings are swapped for ASCII on terminals that cannot
encode UTF-8 (see deadref.utils.logger.ICON_MAP).
"""
from rich.console import Console
from rich.markup import escape
from typing import Any
from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console that sanitizes Unicode output for non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """Initialize SafeConsole with UTF-8 capability detection.

        All arguments are passed through to Rich's Console.
        """
        self._needs_sanitization = not is_utf8_capable()
        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic Unicode sanitization (same signature as Console.print)."""
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj, utf8=False) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)

    def error(self, message: str) -> None:
        """Print an error line; message text is escaped so brackets stay literal."""
        self.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def verdict(self, is_dead: bool) -> str:
        """Styled DEAD/LIVE label for a query result (table cells bypass print())."""
        label = "[bold red]✗ DEAD[/bold red]" if is_dead else "[green]✓ LIVE[/green]"
        if self._needs_sanitization:
            return sanitize_for_terminal(label, utf8=False)
        return label
