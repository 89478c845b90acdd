"""Pytest configuration and fixtures."""

import curses
import logging

import pytest

from terminal_portfolio.capabilities import Capabilities
from terminal_portfolio.session import SessionTracker, reset_session_tracker


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeScreen:
    """Enough of a curses window to drive App and PortfolioView."""

    def __init__(self, keys=(), height: int = 40, width: int = 120):
        self.keys = list(keys)
        self.height = height
        self.width = width
        self.writes: list[tuple[int, int, str]] = []
        self.refreshes = 0

    def getmaxyx(self):
        return self.height, self.width

    def getch(self):
        if self.keys:
            key = self.keys.pop(0)
            if key == curses.KEY_RESIZE:
                self.height, self.width = 30, 100
            return key
        return -1

    def addstr(self, y, x, text, attr=0):
        if y >= self.height or x >= self.width:
            raise curses.error("out of bounds")
        self.writes.append((y, x, text))

    def erase(self):
        self.writes.clear()

    def clear(self):
        self.writes.clear()

    def refresh(self):
        self.refreshes += 1

    def keypad(self, flag):
        pass

    def timeout(self, delay):
        pass

    def immedok(self, flag):
        pass

    def leaveok(self, flag):
        pass

    def text(self) -> str:
        return "\n".join(t for _, _, t in self.writes)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker(clock):
    return SessionTracker(max_sessions=10, session_timeout=1.0, clock=clock)


@pytest.fixture
def plain_caps():
    """Terminal with no color so curses.color_pair is never needed."""
    return Capabilities(supports_color=False, supports_unicode=True, supports_borders=True, supports_resize=True)


@pytest.fixture(autouse=True)
def _reset_default_tracker():
    yield
    reset_session_tracker()


@pytest.fixture
def make_screen():
    return FakeScreen


@pytest.fixture
def restore_logger():
    """Undo setup_logging so later tests still see records through caplog."""
    logger = logging.getLogger("terminal_portfolio")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
