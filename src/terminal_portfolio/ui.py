"""Ncurses UI for the terminal portfolio - header, navigator and section panels."""

import curses
import logging
import textwrap
from dataclasses import dataclass, field, replace
from typing import Callable

from .capabilities import Capabilities, FallbackChars, fallback_chars
from .portfolio import PORTFOLIO, PortfolioData
from .sections import CATALOG, Section

log = logging.getLogger(__name__)

# Minimum dimensions for rendering anything but the frame
MIN_WIDTH = 7
MIN_HEIGHT = 7

HEADER_TITLE = "ASHIK JYOTHI'S PORTFOLIO"
HELP_LINE = "Navigation: arrows, vim (hjkl), numbers (1-6) | 'g' (home), 'G' (contact) | 'q'/ESC/Ctrl+C to exit"
TIMEOUT_MESSAGE = "Session timed out due to inactivity"

# Rows used by chrome: border, title, subtitle, separator, nav, help, separator,
# panel title, separator, status, border
CHROME_ROWS = 11


@dataclass
class Line:
    """One line of panel content with a style name (see PortfolioView._attr)."""

    text: str
    style: str = "text"
    indent: int = 0


@dataclass
class StatusInfo:
    """What the status line and banners show."""

    width: int = 80
    height: int = 24
    sections_visited: int = 0
    session_active: bool = True
    warnings: list[str] = field(default_factory=list)
    message: str = ""


def _wrap(text: str, width: int, style: str = "text", indent: int = 0) -> list[Line]:
    avail = max(10, width - indent)
    return [Line(chunk, style, indent) for chunk in textwrap.wrap(text, avail)] or [Line("", style, indent)]


def home_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    lines = [
        Line(f"{chars.success} Welcome to the Terminal Portfolio!", "title"),
        Line(""),
        Line("Navigate through different sections to explore:"),
    ]
    blurbs = {
        Section.ABOUT: "Personal introduction and background",
        Section.EXPERIENCE: "Professional work history and achievements",
        Section.SKILLS: "Technical expertise and capabilities",
        Section.PROJECTS: "Portfolio of work and achievements",
        Section.CONTACT: "Ways to connect and collaborate",
    }
    for section, blurb in blurbs.items():
        lines.append(Line(f"{chars.bullet} {section.label} - {blurb}", indent=2))
    lines += [
        Line(""),
        Line("Navigation Tips:", "heading"),
        Line(f"{chars.bullet} Use arrow keys or vim keys (hjkl) to navigate", "dim", 2),
        Line(f"{chars.bullet} Press numbers 1-6 for quick section access", "dim", 2),
        Line(f"{chars.bullet} Press 'g' to return home, 'G' for contact", "dim", 2),
        Line(f"{chars.bullet} Press 'q', ESC, or Ctrl+C to exit", "dim", 2),
    ]
    return lines


def about_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    personal = data.personal
    lines = [
        Line(f"Hello, I'm {personal.name}", "title"),
        Line(personal.title, "accent"),
        Line(personal.location, "dim"),
        Line(""),
        Line("About:", "heading"),
    ]
    lines += _wrap(personal.bio, width, indent=2)
    lines += [Line(""), Line("Education:", "heading")]
    for edu in data.education:
        lines.append(Line(edu.degree, "accent", 2))
        lines.append(Line(f"{edu.institution} {chars.dot} {edu.duration}", "dim", 2))
    lines += [Line(""), Line("Certifications:", "heading")]
    for cert in data.certifications:
        lines.append(Line(cert.name, "accent", 2))
        lines.append(Line(f"{cert.issuer} {chars.dot} {cert.year}", "dim", 2))
    return lines


def experience_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    lines = []
    for i, job in enumerate(data.experience):
        if i:
            lines += [Line(chars.horizontal * min(50, max(1, width - 2)), "dim"), Line("")]
        lines += [
            Line(job.position, "title"),
            Line(f"{job.company} {chars.dot} {job.duration}", "accent"),
            Line(job.location, "dim"),
            Line(""),
        ]
        lines += _wrap(job.description, width, indent=2)
        lines.append(Line("Key Achievements:", "heading"))
        for achievement in job.achievements:
            lines += _wrap(f"{chars.success} {achievement}", width, "dim", 2)
        if job.technologies:
            lines.append(Line("Technologies:", "heading"))
            lines += _wrap(" ".join(f"[{t}]" for t in job.technologies), width, "accent", 2)
        lines.append(Line(""))
    return lines


def skills_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    lines = []
    for category in data.skills:
        lines.append(Line(f"{chars.bullet} {category.category}", "title"))
        lines += _wrap(", ".join(category.skills), width, "accent", 2)
        lines.append(Line(""))
    return lines


def projects_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    lines = []
    for project in data.projects:
        lines.append(Line(project.name, "title"))
        lines += _wrap(project.description, width, indent=2)
        lines.append(Line("Technologies:", "heading", 2))
        lines += _wrap(" ".join(f"[{t}]" for t in project.technologies), width, "accent", 4)
        lines.append(Line("Highlights:", "heading", 2))
        for highlight in project.highlights:
            lines += _wrap(f"{chars.bullet} {highlight}", width, "dim", 4)
        if project.github_url:
            lines.append(Line(f"GitHub: {project.github_url}", "link", 2))
        if project.live_url:
            lines.append(Line(f"Live: {project.live_url}", "link", 2))
        lines.append(Line(""))
    return lines


def contact_lines(data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    contact = data.contact
    lines = [Line("Email", "title"), Line(contact.email, "link", 2), Line("")]
    if contact.website:
        lines += [Line("Website", "title"), Line(contact.website, "link", 2), Line("")]
    if contact.social:
        lines.append(Line("Social", "title"))
        for link in contact.social:
            lines.append(Line(f"{link.platform}: {link.username}", "accent", 2))
            lines.append(Line(link.url, "dim", 4))
    lines += [Line(""), Line(f"{chars.sparkle} Let's build something together!", "dim")]
    return lines


SECTION_TITLES = {
    Section.HOME: "Home",
    Section.ABOUT: "About Me",
    Section.EXPERIENCE: "Work Experience",
    Section.SKILLS: "Technical Skills",
    Section.PROJECTS: "Featured Projects",
    Section.CONTACT: "Contact Information",
}

SECTION_RENDERERS: dict[Section, Callable[[PortfolioData, FallbackChars, int], list[Line]]] = {
    Section.HOME: home_lines,
    Section.ABOUT: about_lines,
    Section.EXPERIENCE: experience_lines,
    Section.SKILLS: skills_lines,
    Section.PROJECTS: projects_lines,
    Section.CONTACT: contact_lines,
}


def fallback_panel(name: str, chars: FallbackChars) -> list[Line]:
    return [
        Line(f"{chars.error} {name} failed to load", "error"),
        Line(""),
        Line(f"{chars.bullet} Use the number keys to try another section, 'q' to exit", "dim", 2),
    ]


def section_lines(section: Section, data: PortfolioData, chars: FallbackChars, width: int) -> list[Line]:
    """Build a section panel; a broken panel becomes a fallback instead of a crash."""
    try:
        return SECTION_RENDERERS[section](data, chars, width)
    except Exception:
        log.exception("Failed to build %s panel", section.value)
        return fallback_panel(SECTION_TITLES.get(section, section.label), chars)


def nav_items(current: Section) -> list[tuple[str, bool]]:
    """Navigation bar entries as (text, is_current)."""
    return [(f"[{s.shortcut}] {s.label}", s is current) for s in CATALOG]


def status_text(status: StatusInfo, caps: Capabilities) -> str:
    text = f"Terminal: {status.width}x{status.height}"
    if not caps.supports_color:
        text += " (no color)"
    if not caps.supports_unicode:
        text += " (no unicode)"
    if status.session_active:
        text += f" | Session: {status.sections_visited} sections visited"
    else:
        text += " (session ended)"
    return text


class PortfolioView:
    """Full-screen portfolio view."""

    def __init__(self, stdscr, capabilities: Capabilities, portfolio: PortfolioData = PORTFOLIO):
        self.stdscr = stdscr
        self.caps = capabilities
        self.chars = fallback_chars(capabilities)
        self.portfolio = portfolio
        self.scroll_offset = 0
        self.show_help = False
        self._lines_cache: dict[tuple[Section, int], list[Line]] = {}
        self._init_colors()

    def _init_colors(self):
        """Initialize color pairs."""
        if not self.caps.supports_color:
            return
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_CYAN, -1)      # Title/borders
            curses.init_pair(2, curses.COLOR_GREEN, -1)     # Current section, titles
            curses.init_pair(3, curses.COLOR_YELLOW, -1)    # Headings, warnings
            curses.init_pair(4, curses.COLOR_BLUE, -1)      # Accents
            curses.init_pair(5, curses.COLOR_RED, -1)       # Errors
            curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_CYAN)  # Selected nav item
            curses.init_pair(7, curses.COLOR_MAGENTA, -1)   # Keys
        except curses.error:
            self.caps = replace(self.caps, supports_color=False)

    def _attr(self, style: str) -> int:
        """Curses attribute for a style name; color only when supported."""
        color = self.caps.supports_color
        pair = curses.color_pair if color else (lambda n: 0)
        return {
            "title": pair(2) | curses.A_BOLD,
            "heading": pair(3) | curses.A_BOLD,
            "accent": pair(4),
            "link": pair(1),
            "dim": curses.A_DIM,
            "error": pair(5) | curses.A_BOLD,
            "warning": pair(3),
            "border": pair(1),
            "selected": pair(6) | curses.A_BOLD if color else curses.A_REVERSE | curses.A_BOLD,
            "keys": pair(7) | curses.A_DIM,
        }.get(style, 0)

    def _safe_addstr(self, y: int, x: int, text: str, attr: int = 0, max_width: int = -1):
        """Safely add string, clipping to bounds and avoiding bottom-right corner."""
        height, width = self.stdscr.getmaxyx()
        if y < 0 or y >= height or x < 0 or x >= width:
            return
        avail = width - x
        if max_width > 0:
            avail = min(avail, max_width)
        if avail <= 0:
            return
        text = text[:avail]
        # Avoid writing to bottom-right corner (causes scroll)
        if y == height - 1 and x + len(text) >= width:
            text = text[:width - x - 1]
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass  # Ignore edge case errors

    def content_height(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        return max(1, height - CHROME_ROWS)

    def reset_scroll(self):
        self.scroll_offset = 0

    def scroll(self, delta: int, section: Section):
        """Scroll the current panel, clamped to its length."""
        _, width = self.stdscr.getmaxyx()
        total = len(self._lines(section, width - 4))
        max_offset = max(0, total - self.content_height())
        self.scroll_offset = max(0, min(max_offset, self.scroll_offset + delta))

    def _lines(self, section: Section, width: int) -> list[Line]:
        key = (section, width)
        if key not in self._lines_cache:
            # Keep panels for the current width only
            for stale in [k for k in self._lines_cache if k[1] != width]:
                del self._lines_cache[stale]
            self._lines_cache[key] = section_lines(section, self.portfolio, self.chars, width)
        return self._lines_cache[key]

    def render(self, section: Section, status: StatusInfo):
        """Render the full view."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        # Too small - just show frame
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            self._render_minimal_frame(height, width)
            self.stdscr.refresh()
            return

        if self.show_help:
            self._render_help_screen(height, width)
            self.stdscr.refresh()
            return

        if self.caps.supports_borders:
            self._render_border(height, width)
        self._render_header(width)
        self._render_nav(section, width)
        self._render_content(section, height, width, status)
        self._render_status(section, status, height, width)
        self.stdscr.refresh()

    def _render_minimal_frame(self, height: int, width: int):
        """Render just the border at tiny sizes."""
        c = self.chars
        attr = self._attr("border")
        for y in range(height):
            for x in range(width):
                if y == 0:
                    ch = c.top_left if x == 0 else c.top_right if x == width - 1 else c.horizontal
                elif y == height - 1:
                    ch = c.bottom_left if x == 0 else c.bottom_right if x == width - 1 else c.horizontal
                elif x == 0 or x == width - 1:
                    ch = c.vertical
                else:
                    continue
                # Avoid bottom-right corner
                if y == height - 1 and x == width - 1:
                    continue
                try:
                    self.stdscr.addstr(y, x, ch[0], attr)
                except curses.error:
                    pass

    def _separator(self, y: int, width: int):
        c = self.chars
        if self.caps.supports_borders:
            self._safe_addstr(y, 0, c.separator_left + c.horizontal * max(0, width - 2) + c.separator_right, self._attr("border"))
        else:
            self._safe_addstr(y, 0, "-" * width, curses.A_DIM)

    def _render_border(self, height: int, width: int):
        """Draw the outer frame."""
        c = self.chars
        attr = self._attr("border")
        self._safe_addstr(0, 0, c.top_left + c.horizontal * max(0, width - 2) + c.top_right, attr)
        for y in range(1, height - 1):
            self._safe_addstr(y, 0, c.vertical, attr)
            if width > 1:
                self._safe_addstr(y, width - 1, c.vertical, attr)
        if height > 1:
            # Write bottom row excluding last char to avoid scroll
            self._safe_addstr(height - 1, 0, c.bottom_left + c.horizontal * max(0, width - 3) + c.bottom_right, attr)

    def _centered(self, y: int, text: str, width: int, attr: int = 0):
        inner = width - 4
        text = text[:max(0, inner)]
        x = max(2, (width - len(text)) // 2)
        self._safe_addstr(y, x, text, attr, inner)

    def _render_header(self, width: int):
        self._centered(1, f" {HEADER_TITLE} ", width, self._attr("link") | curses.A_BOLD)
        self._centered(2, self.portfolio.personal.title, width, self._attr("accent"))
        self._separator(3, width)

    def _render_nav(self, section: Section, width: int):
        """Render the section bar, highlighting the current section."""
        items = nav_items(section)
        total = sum(len(text) for text, _ in items) + 3 * (len(items) - 1)
        compact = total > width - 4
        if compact:
            items = [(f"{s.shortcut}:{s.label[:3]}", s is section) for s in CATALOG]
            total = sum(len(text) for text, _ in items) + (len(items) - 1)
        x = max(2, (width - total) // 2)
        for i, (text, is_current) in enumerate(items):
            if i:
                sep = " " if compact else " | "
                self._safe_addstr(4, x, sep, curses.A_DIM)
                x += len(sep)
            self._safe_addstr(4, x, text, self._attr("selected") if is_current else 0)
            x += len(text)
        self._centered(5, HELP_LINE, width, self._attr("keys"))
        self._separator(6, width)

    def _render_content(self, section: Section, height: int, width: int, status: StatusInfo):
        row = 7
        bottom = height - 3  # separator row above the status line
        inner = width - 4

        banners = []
        if status.message:
            banners.append(Line(f"{self.chars.error} {status.message}", "error"))
        for warning in status.warnings:
            banners.append(Line(f"{self.chars.warning} {warning}", "warning"))
        for banner in banners:
            if row >= bottom:
                break
            self._safe_addstr(row, 2, banner.text, self._attr(banner.style), inner)
            row += 1

        if row < bottom:
            self._safe_addstr(row, 2, SECTION_TITLES[section].upper(), self._attr("title") | curses.A_UNDERLINE, inner)
            row += 1

        lines = self._lines(section, inner)
        visible = lines[self.scroll_offset:self.scroll_offset + max(0, bottom - row)]
        for line in visible:
            self._safe_addstr(row, 2 + line.indent, line.text, self._attr(line.style), inner - line.indent)
            row += 1

        if len(lines) > len(visible) + self.scroll_offset:
            self._safe_addstr(bottom - 1, width - 12, "[more PgDn]", curses.A_DIM)

        self._separator(bottom, width)

    def _render_status(self, section: Section, status: StatusInfo, height: int, width: int):
        """Render terminal/session status and position in the footer."""
        pos = f"[{section.index + 1}/{len(CATALOG)}]"
        pos_space = len(pos) + 2
        self._safe_addstr(height - 2, 2, status_text(status, self.caps), curses.A_DIM, width - 4 - pos_space)
        pos_x = width - len(pos) - 2
        if pos_x > 2:
            self._safe_addstr(height - 2, pos_x, pos, self._attr("title"))

    def _render_help_screen(self, height: int, width: int):
        """Render help screen."""
        help_text = [
            "TERMINAL PORTFOLIO",
            "",
            "NAVIGATION",
            "  l/j, right/down  Next section",
            "  h/k, left/up     Previous section",
            "  1-6              Jump to section",
            "  g                Go to home",
            "  G                Go to contact",
            "  PgUp/PgDn        Scroll the current section",
            "",
            "OTHER",
            "  ?                Toggle this help",
            "  q, ESC, Ctrl+C   Exit",
            "",
            "Press ? to return...",
        ]

        self._safe_addstr(1, 2, help_text[0], self._attr("link") | curses.A_BOLD)
        for i, line in enumerate(help_text[1:], start=3):
            if i >= height - 1:
                break
            self._safe_addstr(i, 2, line, 0, width - 4)
