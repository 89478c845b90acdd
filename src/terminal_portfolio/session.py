"""Session lifecycle tracking for the terminal portfolio.

A session is one running instance of the portfolio UI. The tracker keeps a
record per active session, ends sessions that sit idle past the configured
timeout, and publishes lifecycle events (created, activity, ended, shutdown)
to subscribers.

Idle timeouts are monotonic deadlines. The host's event loop calls
``expire_idle()`` on every tick; every other tracker operation sweeps first,
so an expired session is never observed as active.
"""

import logging
import random
import string
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, NamedTuple, Optional, Union

from .sections import Section

log = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100
DEFAULT_SESSION_TIMEOUT = 30 * 60  # seconds

# Share of max_sessions force-ended when the tracker is full
EVICTION_FRACTION = 0.1

END_REASONS = ("disconnect", "timeout", "shutdown", "error", "manual")
EVENTS = ("created", "activity", "ended", "shutdown")


class SessionError(Exception):
    """Base class for session tracker failures."""


class CapacityError(SessionError):
    """No room for a new session even after evicting idle ones."""


class ShuttingDownError(SessionError):
    """Session creation attempted after shutdown began."""


class TerminalSize(NamedTuple):
    width: int
    height: int


@dataclass
class SessionRecord:
    """Lifecycle record of one running portfolio instance."""

    id: str
    start_time: datetime
    last_activity: datetime
    sections_visited: list[str] = field(default_factory=list)
    terminal_size: Optional[TerminalSize] = None
    end_time: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def duration(self) -> timedelta:
        """Time from start to end, or to now while still running."""
        end = self.end_time or datetime.now()
        return end - self.start_time

    @property
    def duration_display(self) -> str:
        """Human-readable duration."""
        secs = int(self.duration.total_seconds())
        if secs < 60:
            return f"{secs}s"
        mins = secs // 60
        if mins < 60:
            return f"{mins}m"
        hours = mins // 60
        mins = mins % 60
        return f"{hours}h {mins}m" if mins else f"{hours}h"


@dataclass
class SessionEnded:
    """Payload of the "ended" event."""

    session: SessionRecord
    reason: str
    duration: float  # seconds

    @property
    def id(self) -> str:
        return self.session.id


@dataclass
class SessionStats:
    active_sessions: int
    total_sessions: int
    average_session_duration: int  # seconds, ended sessions only
    most_visited_sections: list[tuple[str, int]]


def _base36(number: int) -> str:
    digits = string.digits + string.ascii_lowercase
    if number == 0:
        return "0"
    out = ""
    while number:
        number, rem = divmod(number, 36)
        out = digits[rem] + out
    return out


def generate_session_id() -> str:
    """Opaque unique id: session_<base36 ms timestamp>_<random>."""
    stamp = _base36(int(time.time() * 1000))
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"session_{stamp}_{suffix}"


def _section_name(section: Union[Section, str]) -> str:
    return section.value if isinstance(section, Section) else section


class SessionTracker:
    """Owns the active session map and the per-session idle deadlines."""

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        session_timeout: float = DEFAULT_SESSION_TIMEOUT,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_sessions = max_sessions
        self.session_timeout = session_timeout
        self._clock = clock or time.monotonic
        self._sessions: dict[str, SessionRecord] = {}
        self._started: dict[str, float] = {}
        self._deadlines: dict[str, float] = {}
        self._listeners: dict[str, list[Callable]] = {name: [] for name in EVENTS}
        self._created_count = 0
        self._durations: list[float] = []
        self._visit_counts: Counter = Counter()
        self._shutting_down = False

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    # Events

    def on(self, event: str, callback: Callable) -> None:
        """Subscribe to a lifecycle event."""
        if event not in self._listeners:
            raise ValueError(f"Unknown session event: {event}")
        self._listeners[event].append(callback)

    def off(self, event: str, callback: Callable) -> None:
        """Unsubscribe; unknown callbacks are ignored."""
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def _emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            try:
                callback(*args)
            except Exception:
                log.exception("Session %s listener failed", event)

    # Lifecycle

    def create_session(self, session_id: Optional[str] = None) -> str:
        """Start tracking a new session and return its id."""
        if self._shutting_down:
            raise ShuttingDownError("Session tracker is shutting down")

        self.expire_idle()

        if len(self._sessions) >= self.max_sessions:
            log.warning(
                "Maximum sessions reached (%d). Cleaning up oldest sessions.",
                self.max_sessions,
            )
            self._evict_oldest(max(1, int(self.max_sessions * EVICTION_FRACTION)))
            if len(self._sessions) >= self.max_sessions:
                raise CapacityError(f"No capacity for new session (max {self.max_sessions})")

        sid = session_id or generate_session_id()
        if sid in self._sessions:
            log.warning("Session id %s already active, replacing it", sid)
            self.end_session(sid, "disconnect")

        now = datetime.now()
        record = SessionRecord(id=sid, start_time=now, last_activity=now)
        self._sessions[sid] = record
        self._started[sid] = self._clock()
        self._created_count += 1
        self._arm_deadline(sid)

        log.info("Session created: %s", sid)
        self._emit("created", record)
        return sid

    def update_activity(self, session_id: str, section: Union[Section, str, None] = None) -> None:
        """Record activity: refresh last_activity, note the section, restart the idle countdown."""
        self.expire_idle()

        record = self._sessions.get(session_id)
        if record is None:
            log.warning("Attempted to update non-existent session: %s", session_id)
            return

        record.last_activity = datetime.now()

        if section is not None:
            name = _section_name(section)
            if name not in record.sections_visited:
                record.sections_visited.append(name)
                self._visit_counts[name] += 1
                log.debug("Session %s visited section: %s", session_id, name)

        self._arm_deadline(session_id)
        self._emit("activity", record)

    def update_terminal_size(self, session_id: str, size: Union[TerminalSize, tuple[int, int]]) -> None:
        """Record the terminal size; counts as activity."""
        self.expire_idle()

        record = self._sessions.get(session_id)
        if record is None:
            log.warning("Attempted to resize non-existent session: %s", session_id)
            return

        record.terminal_size = TerminalSize(*size)
        self.update_activity(session_id)

    def end_session(self, session_id: str, reason: str = "disconnect") -> None:
        """End a session exactly once; later calls are no-ops."""
        record = self._sessions.pop(session_id, None)
        if record is None:
            self._deadlines.pop(session_id, None)
            return

        if reason not in END_REASONS:
            log.warning("Unknown end reason for session %s: %s", session_id, reason)

        record.end_time = datetime.now()
        duration = self._clock() - self._started.pop(session_id)
        self._deadlines.pop(session_id, None)
        self._durations.append(duration)

        log.info("Session ended: %s (%s) - Duration: %ds", session_id, reason, round(duration))

        # Removed before notifying so listeners see the session as gone
        self._emit("ended", SessionEnded(session=record, reason=reason, duration=duration))

    def expire_idle(self) -> list[str]:
        """End every session whose idle deadline has passed. Returns their ids."""
        if not self._deadlines:
            return []
        now = self._clock()
        expired = sorted(
            (deadline, sid) for sid, deadline in self._deadlines.items() if now >= deadline
        )
        for _, sid in expired:
            self.end_session(sid, "timeout")
        return [sid for _, sid in expired]

    def next_deadline(self) -> Optional[float]:
        """Earliest pending idle deadline on the tracker's clock."""
        return min(self._deadlines.values(), default=None)

    def _arm_deadline(self, session_id: str) -> None:
        self._deadlines[session_id] = self._clock() + self.session_timeout

    def _evict_oldest(self, count: int) -> None:
        # Deadlines order sessions by their last activity on the tracker clock
        oldest = sorted(self._sessions, key=lambda sid: self._deadlines.get(sid, 0.0))[:count]
        for sid in oldest:
            self.end_session(sid, "timeout")

    # Queries

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        self.expire_idle()
        return self._sessions.get(session_id)

    def get_active_sessions(self) -> list[SessionRecord]:
        self.expire_idle()
        return list(self._sessions.values())

    def get_stats(self) -> SessionStats:
        """Aggregate counts over this process's sessions.

        Section counts are per session: a session visiting a section many
        times counts once for it.
        """
        self.expire_idle()
        average = sum(self._durations) / len(self._durations) if self._durations else 0
        return SessionStats(
            active_sessions=len(self._sessions),
            total_sessions=self._created_count,
            average_session_duration=round(average),
            most_visited_sections=self._visit_counts.most_common(5),
        )

    async def shutdown(self) -> None:
        """End all sessions and stop accepting new ones. Safe to call twice."""
        if self._shutting_down:
            return
        self._shutting_down = True
        log.info("Session tracker shutting down...")

        for sid in list(self._sessions):
            self.end_session(sid, "shutdown")
        self._deadlines.clear()

        self._emit("shutdown")
        log.info("Session tracker shutdown complete")


class SessionHandle:
    """The running app's view of its own session.

    Forwards activity while the session is alive and goes inactive once the
    tracker ends it, whatever the reason.
    """

    def __init__(
        self,
        tracker: SessionTracker,
        on_end: Optional[Callable[[str], None]] = None,
        session_id: Optional[str] = None,
    ):
        self.tracker = tracker
        self.on_end = on_end
        self.end_reason: Optional[str] = None
        self.session_id = tracker.create_session(session_id)
        tracker.on("ended", self._handle_ended)

    @property
    def active(self) -> bool:
        return self.end_reason is None

    @property
    def info(self) -> Optional[SessionRecord]:
        return self.tracker.get_session(self.session_id)

    def update_activity(self, section: Union[Section, str, None] = None) -> None:
        if self.active:
            self.tracker.update_activity(self.session_id, section)

    def update_terminal_size(self, width: int, height: int) -> None:
        if self.active:
            self.tracker.update_terminal_size(self.session_id, TerminalSize(width, height))

    def close(self, reason: str = "disconnect") -> None:
        if self.active:
            self.tracker.end_session(self.session_id, reason)

    def _handle_ended(self, event: SessionEnded):
        if event.id != self.session_id:
            return
        self.end_reason = event.reason
        self.tracker.off("ended", self._handle_ended)
        if self.on_end:
            self.on_end(event.reason)


_default_tracker: Optional[SessionTracker] = None


def get_session_tracker(**options) -> SessionTracker:
    """Return the process-wide tracker, creating it on first use."""
    global _default_tracker
    if _default_tracker is None:
        _default_tracker = SessionTracker(**options)
    return _default_tracker


def initialize_session_tracker(**options) -> SessionTracker:
    """Replace the process-wide tracker with a fresh one."""
    global _default_tracker
    _default_tracker = SessionTracker(**options)
    return _default_tracker


def reset_session_tracker() -> None:
    global _default_tracker
    _default_tracker = None
