"""Encoding-safe diagnostic output.

Detects terminal encoding and swaps Unicode glyphs for ASCII alternatives so
registry dumps and CLI verdicts never crash a non-UTF-8 terminal. Diagnostic
log lines are tagged with the emitting component, e.g.
``[DeadReferenceMap] Frozen <DeadReferenceMap classes=2 methods=0 fields=1>``.
"""
import sys
import locale
from typing import Callable, Optional

from deadref.config import get_config


# Unicode to ASCII glyph mapping for non-UTF-8 terminals
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[DEAD]',
    '⚠': '[WARN]',
    '→': '->',
    '⇒': '=>',
    '…': '...',
    '•': '*',
    '─': '-',
    '│': '|',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if hasattr(sys.stdout, 'encoding') and sys.stdout.encoding:
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (AttributeError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can handle UTF-8 Unicode characters."""
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str, utf8: Optional[bool] = None) -> str:
    """Replace Unicode glyphs with ASCII equivalents if terminal doesn't support UTF-8.

    Args:
        text: Text potentially containing Unicode glyphs
        utf8: Override for terminal capability (detected when None)

    Returns:
        str: Sanitized text safe for current terminal
    """
    if utf8 is None:
        utf8 = is_utf8_capable()
    if utf8:
        return text

    sanitized = text
    for unicode_char, ascii_replacement in ICON_MAP.items():
        sanitized = sanitized.replace(unicode_char, ascii_replacement)

    return sanitized


def create_safe_print(stream=None) -> Callable:
    """Create a print function that automatically sanitizes output.

    Args:
        stream: Target stream; resolved at call time when None (stdout)

    Returns:
        Callable: Safe print function
    """
    def safe_print(*args, **kwargs):
        """Print with automatic Unicode sanitization."""
        sanitized_args = [
            sanitize_for_terminal(arg) if isinstance(arg, str) else arg
            for arg in args
        ]
        if stream is not None:
            kwargs.setdefault('file', stream)
        print(*sanitized_args, **kwargs)

    return safe_print


safe_print = create_safe_print()


def debug_enabled() -> bool:
    """Whether log_debug() output is on; check before building costly messages."""
    return get_config().verbose


def log_debug(component: str, message: str):
    """Print a component-tagged diagnostic line to stderr in verbose mode.

    Args:
        component: Emitting component, e.g. 'DeadReferenceMap'
        message: Log message
    """
    if not debug_enabled():
        return
    safe_print(f"[{component}] {message}", file=sys.stderr)
