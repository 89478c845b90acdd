"""Terminal capability detection with graceful fallbacks.

The probe is a pure function of the environment and the output stream; the
render layer uses the result to drop color, unicode glyphs or borders on
terminals that can't show them.
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

COLOR_TERMS = ["xterm", "xterm-color", "xterm-256color", "screen", "screen-256color"]

# Known terminfo locations by priority
TERMINFO_PATHS = [
    "/usr/lib/kitty/terminfo",      # Kitty's custom terminfo
    "/usr/share/terminfo",           # Standard Linux (Ubuntu, Fedora, Arch, WSL)
    "/lib/terminfo",                 # Some minimal systems
    "/opt/homebrew/share/terminfo",  # macOS Homebrew
    "/usr/local/share/terminfo",     # macOS/BSD manual installs
]


@dataclass(frozen=True)
class Capabilities:
    supports_color: bool = True
    supports_unicode: bool = True
    supports_borders: bool = True
    supports_resize: bool = True
    min_width: int = 60
    min_height: int = 20


@dataclass(frozen=True)
class FallbackChars:
    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    separator_left: str
    separator_right: str
    bullet: str
    arrow: str
    dot: str
    success: str
    error: str
    warning: str
    loading: str
    sparkle: str


UNICODE_CHARS = FallbackChars(
    horizontal="─", vertical="│",
    top_left="╭", top_right="╮", bottom_left="╰", bottom_right="╯",
    separator_left="├", separator_right="┤",
    bullet="▶", arrow="→", dot="·",
    success="✓", error="✗", warning="⚠", loading="⏳", sparkle="✨",
)

ASCII_CHARS = FallbackChars(
    horizontal="-", vertical="|",
    top_left="+", top_right="+", bottom_left="+", bottom_right="+",
    separator_left="+", separator_right="+",
    bullet=">", arrow="->", dot=".",
    success="[OK]", error="[ERROR]", warning="[WARN]", loading="[LOADING]", sparkle="*",
)


@dataclass(frozen=True)
class DimensionCheck:
    width: int
    height: int
    is_too_small: bool
    warnings: list[str]


def detect_capabilities(
    env: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> Capabilities:
    """Probe what the output terminal supports."""
    if env is None:
        env = os.environ
    if stream is None:
        stream = sys.stdout

    term = env.get("TERM", "")
    color = True
    unicode = True
    borders = True

    if env.get("NO_COLOR") or (not env.get("FORCE_COLOR") and not any(t in term for t in COLOR_TERMS)):
        color = False

    encoding = env.get("LANG") or env.get("LC_ALL") or ""
    if "utf" not in encoding.lower():
        unicode = False

    if "dumb" in term or env.get("CI"):
        borders = False
        unicode = False

    try:
        resize = stream.isatty()
    except (AttributeError, ValueError):
        resize = False

    return Capabilities(
        supports_color=color,
        supports_unicode=unicode,
        supports_borders=borders,
        supports_resize=resize,
    )


def fallback_chars(caps: Capabilities) -> FallbackChars:
    """Glyph set matching the terminal's unicode support."""
    return UNICODE_CHARS if caps.supports_unicode else ASCII_CHARS


def validate_dimensions(width: int, height: int, caps: Capabilities) -> DimensionCheck:
    """Clamp a terminal size to the minimum layout and describe any shortfall."""
    warnings = []
    if width < caps.min_width:
        warnings.append(f"Terminal width ({width}) is below minimum ({caps.min_width})")
    if height < caps.min_height:
        warnings.append(f"Terminal height ({height}) is below minimum ({caps.min_height})")
    return DimensionCheck(
        width=max(width or 80, caps.min_width),
        height=max(height or 24, caps.min_height),
        is_too_small=bool(warnings),
        warnings=warnings,
    )


def _terminfo_has(terminfo_dir: str, term_name: str) -> bool:
    """Check if terminfo directory has definition for term_name."""
    if not term_name or not os.path.isdir(terminfo_dir):
        return False
    # terminfo files are stored as first-char/term-name (e.g., x/xterm-256color)
    return os.path.exists(os.path.join(terminfo_dir, term_name[0], term_name))


def setup_terminal_env():
    """Point TERM/TERMINFO at a definition curses can load.

    Falls back to xterm-256color when the current TERM has no terminfo entry.
    """
    term = os.environ.get("TERM", "")

    if term:
        current = os.environ.get("TERMINFO", "")
        if current and _terminfo_has(current, term):
            return
        for path in TERMINFO_PATHS:
            if _terminfo_has(path, term):
                os.environ["TERMINFO"] = path
                return

    os.environ["TERM"] = "xterm-256color"
    for path in TERMINFO_PATHS:
        if _terminfo_has(path, "xterm-256color"):
            os.environ["TERMINFO"] = path
            return

    # Last resort - hope /usr/share/terminfo exists
    os.environ["TERMINFO"] = "/usr/share/terminfo"


def check_terminal() -> tuple[bool, Optional[str]]:
    """Check if terminal environment supports curses."""
    import curses

    if not sys.stdin.isatty():
        return False, "Not running in a TTY"

    if not os.environ.get("TERM"):
        return False, "TERM environment variable not set"

    terminfo = os.environ.get("TERMINFO", "/usr/share/terminfo")
    if not os.path.isdir(terminfo):
        return False, f"TERMINFO directory not found: {terminfo}"

    try:
        curses.setupterm()
    except curses.error as e:
        return False, f"curses.setupterm() failed: {e}"

    return True, None
