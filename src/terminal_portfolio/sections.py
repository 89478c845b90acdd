"""Section catalog for the portfolio - fixed order, labels and shortcuts."""

from enum import Enum
from typing import Optional


class Section(Enum):
    HOME = "home"
    ABOUT = "about"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    PROJECTS = "projects"
    CONTACT = "contact"

    @property
    def index(self) -> int:
        """Position in the catalog (0-based)."""
        return CATALOG.index(self)

    @property
    def label(self) -> str:
        """Display label used in the navigation bar."""
        return self.value.capitalize()

    @property
    def shortcut(self) -> str:
        """Numeric key that jumps to this section."""
        return str(self.index + 1)


# Order defines next/previous and the 1-6 shortcuts
CATALOG: tuple[Section, ...] = tuple(Section)

SHORTCUTS: dict[str, Section] = {str(i + 1): s for i, s in enumerate(CATALOG)}

FIRST = CATALOG[0]
LAST = CATALOG[-1]


def section_for_shortcut(key: str) -> Optional[Section]:
    """Return the section bound to a digit key, or None."""
    return SHORTCUTS.get(key)


def section_at(index: int) -> Section:
    """Return the section at index, wrapping around the catalog."""
    return CATALOG[index % len(CATALOG)]
