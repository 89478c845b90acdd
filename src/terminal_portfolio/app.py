"""terminal-portfolio - interactive portfolio in the terminal.

Navigate the portfolio sections with arrow keys, vim keys or number shortcuts.
"""

import argparse
import asyncio
import curses
import logging
import signal
import sys
from typing import Optional

from . import __version__
from .capabilities import (
    Capabilities,
    check_terminal,
    detect_capabilities,
    setup_terminal_env,
    validate_dimensions,
)
from .config import load_settings, setup_logging
from .navigation import IntentKind, Navigator, key_to_event
from .sections import Section
from .session import SessionHandle, SessionTracker, initialize_session_tracker
from .ui import TIMEOUT_MESSAGE, PortfolioView, StatusInfo

log = logging.getLogger(__name__)

PROG = "terminal-portfolio"

HELP_TEXT = f"""
Terminal Portfolio - Interactive portfolio in your terminal

Usage: {PROG} [options]

Options:
  -h, --help     Show this help message
  -v, --version  Show version information

This application displays an interactive portfolio interface in the terminal.
Use arrow keys or vim-style navigation (hjkl) to navigate between sections.
Press 'q' or Ctrl+C to exit.
"""

SHUTDOWN_SIGNALS = [
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
]


class StartupError(Exception):
    """Session tracking or the curses UI could not be brought up."""


class App:
    """Main application controller."""

    def __init__(self, stdscr, tracker: SessionTracker, capabilities: Capabilities):
        self.stdscr = stdscr
        self.tracker = tracker
        self.caps = capabilities
        self.view = PortfolioView(stdscr, capabilities)
        self.running = True
        self.stop_reason: Optional[str] = None
        self.message = ""
        self.warnings: list[str] = []
        self.session = SessionHandle(tracker, on_end=self._on_session_end)
        self.navigator = Navigator(session=self.session, on_change=self._on_section_change)

        self.stdscr.keypad(True)
        self.stdscr.timeout(100)
        try:
            curses.curs_set(0)
            curses.cbreak()
            self.stdscr.immedok(False)
            self.stdscr.leaveok(True)
        except curses.error:
            pass

        self._update_dimensions()

    @property
    def current_section(self) -> Section:
        return self.navigator.current

    def stop(self, reason: str = "shutdown"):
        """Ask the event loop to exit after the current tick."""
        self.running = False
        if self.stop_reason is None:
            self.stop_reason = reason

    def run(self) -> Optional[str]:
        """Main event loop. Returns why it stopped."""
        while self.running:
            try:
                self._render()
                self._handle_input()
                self.tracker.expire_idle()
            except KeyboardInterrupt:
                self.stop("shutdown")
        return self.stop_reason

    def _on_section_change(self, section: Section):
        log.debug("Section changed to %s", section.value)
        self.view.reset_scroll()

    def _on_session_end(self, reason: str):
        log.info("Session ended: %s", reason)
        if reason == "timeout":
            self.message = TIMEOUT_MESSAGE

    def _update_dimensions(self):
        height, width = self.stdscr.getmaxyx()
        self.warnings = validate_dimensions(width, height, self.caps).warnings
        self.session.update_terminal_size(width, height)

    def _status(self) -> StatusInfo:
        height, width = self.stdscr.getmaxyx()
        info = self.session.info
        return StatusInfo(
            width=width,
            height=height,
            sections_visited=len(info.sections_visited) if info else 0,
            session_active=self.session.active,
            warnings=self.warnings,
            message=self.message,
        )

    def _render(self):
        self.view.render(self.navigator.current, self._status())

    def _handle_input(self):
        """Handle one key, if any arrived within the poll timeout."""
        try:
            key = self.stdscr.getch()
        except curses.error:
            return

        if key == -1:
            return

        if key == curses.KEY_RESIZE:
            if self.caps.supports_resize:
                self._handle_resize()
            return

        if self.view.show_help:
            if key in (ord("?"), ord("q"), 27, ord("\n"), 10, 13):
                self.view.show_help = False
            return

        if key == ord("?"):
            self.view.show_help = True
        elif key == curses.KEY_NPAGE or key == 4:  # Ctrl+D
            self.view.scroll(self.view.content_height(), self.navigator.current)
        elif key == curses.KEY_PPAGE or key == 21:  # Ctrl+U
            self.view.scroll(-self.view.content_height(), self.navigator.current)
        else:
            raw, modifiers = key_to_event(key)
            intent = self.navigator.handle_key(raw, modifiers)
            if intent.kind == IntentKind.EXIT:
                self.session.close("manual")
                self.stop("exit")

    def _handle_resize(self):
        """Handle terminal resize."""
        try:
            curses.update_lines_cols()
        except curses.error:
            pass
        self._update_dimensions()
        self.view.scroll(0, self.navigator.current)
        self.stdscr.clear()


def _run_app(stdscr, tracker: SessionTracker, capabilities: Capabilities) -> Optional[str]:
    """Entry point for curses wrapper."""
    try:
        app = App(stdscr, tracker, capabilities)
    except Exception as e:
        raise StartupError(f"UI bootstrap failed: {e}") from e

    previous = {}

    def handle_signal(signum, frame):
        log.info("Received %s, shutting down", signal.Signals(signum).name)
        app.stop("shutdown")

    for sig in SHUTDOWN_SIGNALS:
        previous[sig] = signal.signal(sig, handle_signal)
    try:
        return app.run()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def shutdown_tracker(tracker: SessionTracker, reason: str = "shutdown"):
    """End every session and log the run summary. Cleanup failures are logged, not raised."""
    try:
        if reason != "shutdown":
            for record in tracker.get_active_sessions():
                tracker.end_session(record.id, reason)
        asyncio.run(tracker.shutdown())
        stats = tracker.get_stats()
        log.info(
            "Session summary: %d total, average duration %ds, most visited: %s",
            stats.total_sessions,
            stats.average_session_duration,
            ", ".join(f"{name} ({count})" for name, count in stats.most_visited_sections) or "none",
        )
    except Exception:
        log.exception("Error during session cleanup")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line flags; unknown arguments are ignored."""
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    args = parse_args(argv)

    if args.help:
        print(HELP_TEXT)
        sys.exit(0)

    if args.version:
        print(f"{PROG} v{__version__}")
        sys.exit(0)

    settings = load_settings()
    setup_logging(settings)

    setup_terminal_env()
    ok, err = check_terminal()
    if not ok:
        log.error("Terminal check failed: %s", err)
        print(f"Terminal check failed: {err}")
        print()
        print("Run with explicit environment:")
        print()
        print(f"  TERM=xterm-256color TERMINFO=/usr/share/terminfo {PROG}")
        print()
        sys.exit(1)

    try:
        tracker = initialize_session_tracker(
            max_sessions=settings.max_sessions,
            session_timeout=settings.session_timeout,
        )
    except Exception as e:
        log.exception("Session tracker initialization failed")
        print(f"Failed to start terminal portfolio: {e}", file=sys.stderr)
        sys.exit(1)

    capabilities = detect_capabilities()
    log.info("Starting %s v%s (%s)", PROG, __version__, capabilities)

    try:
        reason = curses.wrapper(_run_app, tracker, capabilities)
    except StartupError as e:
        log.error("Failed to start application: %s", e)
        shutdown_tracker(tracker)
        print(f"Failed to start terminal portfolio: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        log.exception("Uncaught exception")
        shutdown_tracker(tracker, "error")
        print(f"terminal-portfolio crashed: {e}", file=sys.stderr)
        sys.exit(1)

    log.info("Exiting (%s)", reason)
    shutdown_tracker(tracker)
