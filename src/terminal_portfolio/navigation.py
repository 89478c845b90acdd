"""Keyboard navigation - input decoding and the section state machine.

Navigation follows the same conventions as the section list:
- arrows, h/j/k/l: previous / next section (wraps around)
- 1-6: jump straight to a section
- g/G: first / last section
- q, ESC, Ctrl+C: exit
"""

import curses
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .sections import CATALOG, FIRST, LAST, Section, section_at, section_for_shortcut
from .session import SessionHandle


class IntentKind(Enum):
    NEXT = auto()
    PREVIOUS = auto()
    GOTO = auto()
    JUMP_FIRST = auto()
    JUMP_LAST = auto()
    EXIT = auto()
    IGNORE = auto()


@dataclass(frozen=True)
class Intent:
    """A decoded navigation command."""

    kind: IntentKind
    target: Optional[Section] = None  # only for GOTO


@dataclass(frozen=True)
class Modifiers:
    """Special keys accompanying a raw keypress."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    escape: bool = False
    ctrl: bool = False


NO_MODIFIERS = Modifiers()

NEXT = Intent(IntentKind.NEXT)
PREVIOUS = Intent(IntentKind.PREVIOUS)
JUMP_FIRST = Intent(IntentKind.JUMP_FIRST)
JUMP_LAST = Intent(IntentKind.JUMP_LAST)
EXIT = Intent(IntentKind.EXIT)
IGNORE = Intent(IntentKind.IGNORE)


def goto(section: Section) -> Intent:
    return Intent(IntentKind.GOTO, section)


def _vim_key(raw: str) -> str:
    return raw.lower() if len(raw) == 1 and raw.isalpha() else raw


# Ordered (predicate, intent factory) pairs; the first match wins
RULES: list[tuple[Callable[[str, Modifiers], bool], Callable[[str], Intent]]] = [
    (lambda raw, m: m.escape or raw == "q" or (m.ctrl and raw == "c"), lambda raw: EXIT),
    (lambda raw, m: section_for_shortcut(raw) is not None, lambda raw: goto(section_for_shortcut(raw))),
    (lambda raw, m: m.up or m.left, lambda raw: PREVIOUS),
    (lambda raw, m: m.down or m.right, lambda raw: NEXT),
    (lambda raw, m: _vim_key(raw) in ("h", "k"), lambda raw: PREVIOUS),
    (lambda raw, m: _vim_key(raw) in ("l", "j"), lambda raw: NEXT),
    (lambda raw, m: raw == "g", lambda raw: JUMP_FIRST),
    (lambda raw, m: raw == "G", lambda raw: JUMP_LAST),
]


def decode(raw: str, modifiers: Modifiers = NO_MODIFIERS) -> Intent:
    """Map a keypress to an intent. Never raises."""
    for matches, make in RULES:
        if matches(raw, modifiers):
            return make(raw)
    return IGNORE


def apply(intent: Intent, current: Section) -> Section:
    """Return the section an intent leads to from current."""
    kind = intent.kind
    if kind == IntentKind.NEXT:
        return section_at(current.index + 1)
    if kind == IntentKind.PREVIOUS:
        return section_at(current.index - 1)
    if kind == IntentKind.GOTO and intent.target in CATALOG:
        return intent.target
    if kind == IntentKind.JUMP_FIRST:
        return FIRST
    if kind == IntentKind.JUMP_LAST:
        return LAST
    return current


def key_to_event(key: int) -> tuple[str, Modifiers]:
    """Translate a curses key code into (raw input, modifiers)."""
    if key == curses.KEY_UP:
        return "", Modifiers(up=True)
    if key == curses.KEY_DOWN:
        return "", Modifiers(down=True)
    if key == curses.KEY_LEFT:
        return "", Modifiers(left=True)
    if key == curses.KEY_RIGHT:
        return "", Modifiers(right=True)
    if key == 27:  # ESC
        return "", Modifiers(escape=True)
    if key == 3:  # Ctrl+C in raw mode
        return "c", Modifiers(ctrl=True)
    if 32 <= key < 127:
        return chr(key), NO_MODIFIERS
    return "", NO_MODIFIERS


class Navigator:
    """Holds the current section and reports real changes to the session."""

    def __init__(
        self,
        start: Section = FIRST,
        session: Optional[SessionHandle] = None,
        on_change: Optional[Callable[[Section], None]] = None,
    ):
        self.current = start
        self.session = session
        self.on_change = on_change

    def dispatch(self, intent: Intent) -> Section:
        """Apply an intent; activity is recorded only when the section changes."""
        new = apply(intent, self.current)
        if new is not self.current:
            self.current = new
            if self.session:
                self.session.update_activity(new)
            if self.on_change:
                self.on_change(new)
        return self.current

    def handle_key(self, raw: str, modifiers: Modifiers = NO_MODIFIERS) -> Intent:
        """Decode and apply a keypress. Returns the intent so the host can act on EXIT."""
        intent = decode(raw, modifiers)
        self.dispatch(intent)
        return intent
