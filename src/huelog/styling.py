"""
ANSI styling primitives.

Style flags combine with ``|`` and render to a single SGR escape sequence.
Whether the terminal understands ANSI sequences is probed once per process
and cached; when it does not, every rendered sequence is the empty string.
"""

from __future__ import annotations

import re
import sys
import threading
from enum import IntFlag

import colorama

# =============================================================================
# Style Flags
# =============================================================================


class Style(IntFlag):
    """Independent, combinable visual attributes."""

    RESET = 0

    # Weight / decoration
    BOLD = 1
    DIM = 1 << 1
    ITALIC = 1 << 2
    UNDERLINE = 1 << 3
    STRIKEOUT = 1 << 4
    NORMAL = 1 << 5

    # Standard foreground colors
    BLACK = 1 << 6
    RED = 1 << 7
    GREEN = 1 << 8
    YELLOW = 1 << 9
    BLUE = 1 << 10
    MAGENTA = 1 << 11
    CYAN = 1 << 12
    WHITE = 1 << 13

    # Bright foreground colors
    BRIGHT_BLACK = 1 << 14
    BRIGHT_RED = 1 << 15
    BRIGHT_GREEN = 1 << 16
    BRIGHT_YELLOW = 1 << 17
    BRIGHT_BLUE = 1 << 18
    BRIGHT_MAGENTA = 1 << 19
    BRIGHT_CYAN = 1 << 20
    BRIGHT_WHITE = 1 << 21

    # Severity presets
    DEBUG = BRIGHT_BLACK
    INFO = CYAN
    WARNING = BOLD | YELLOW
    ERROR = BOLD | RED
    SUCCESS = BOLD | GREEN


_WEIGHT_CODES = (
    (Style.BOLD, 1),
    (Style.DIM, 2),
    (Style.ITALIC, 3),
    (Style.UNDERLINE, 4),
    (Style.STRIKEOUT, 9),
    (Style.NORMAL, 22),
)

# Palette order; the first color set wins.
_COLOR_CODES = (
    (Style.BLACK, 30),
    (Style.RED, 31),
    (Style.GREEN, 32),
    (Style.YELLOW, 33),
    (Style.BLUE, 34),
    (Style.MAGENTA, 35),
    (Style.CYAN, 36),
    (Style.WHITE, 37),
    (Style.BRIGHT_BLACK, 90),
    (Style.BRIGHT_RED, 91),
    (Style.BRIGHT_GREEN, 92),
    (Style.BRIGHT_YELLOW, 93),
    (Style.BRIGHT_BLUE, 94),
    (Style.BRIGHT_MAGENTA, 95),
    (Style.BRIGHT_CYAN, 96),
    (Style.BRIGHT_WHITE, 97),
)

RESET_SEQUENCE = "\033[0m"

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

# =============================================================================
# Terminal Capability
# =============================================================================

_styled: bool | None = None
_probe_lock = threading.Lock()


def _probe_terminal() -> bool:
    """Check whether ANSI sequences can be written to stdout."""
    try:
        if not sys.stdout.isatty():
            return False
        if sys.platform == "win32":
            colorama.just_fix_windows_console()
        return True
    except (AttributeError, OSError, ValueError):
        return False


def is_terminal_styled() -> bool:
    """Process-wide, cached answer to "are ANSI sequences supported"."""
    global _styled

    if _styled is None:
        with _probe_lock:
            if _styled is None:
                _styled = _probe_terminal()
    return _styled


def set_terminal_styled(value: bool | None) -> None:
    """Force the cached capability; ``None`` re-probes on next query."""
    global _styled
    _styled = value


# =============================================================================
# Rendering
# =============================================================================


def sgr(flags: Style = Style.RESET, no_reset: bool = False) -> str:
    """Build the SGR sequence for ``flags`` regardless of terminal support."""
    if flags == Style.RESET:
        return RESET_SEQUENCE

    codes = [str(code) for flag, code in _WEIGHT_CODES if flags & flag]
    for flag, code in _COLOR_CODES:
        if flags & flag:
            codes.append(str(code))
            break

    prefix = "\033[" if no_reset else "\033[0;"
    if no_reset or codes:
        return prefix + ";".join(codes) + "m"
    return RESET_SEQUENCE


def style(flags: Style = Style.RESET, no_reset: bool = False) -> str:
    """Render ``flags`` as an ANSI sequence, or ``""`` on unstyled terminals."""
    if not is_terminal_styled():
        return ""
    return sgr(flags, no_reset)


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from ``text``."""
    return _ANSI_PATTERN.sub("", text)
