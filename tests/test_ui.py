"""Tests for the panel builders and the curses view."""

from dataclasses import replace

import pytest

from terminal_portfolio import ui
from terminal_portfolio.capabilities import ASCII_CHARS, UNICODE_CHARS, Capabilities
from terminal_portfolio.portfolio import PORTFOLIO
from terminal_portfolio.sections import CATALOG, Section
from terminal_portfolio.ui import (
    HEADER_TITLE,
    PortfolioView,
    StatusInfo,
    nav_items,
    section_lines,
    status_text,
)


def texts(lines):
    return [line.text for line in lines]


class TestPanels:
    """Test the pure panel builders."""

    @pytest.mark.parametrize("section", CATALOG)
    def test_every_section_has_content(self, section):
        lines = section_lines(section, PORTFOLIO, UNICODE_CHARS, 80)
        assert any(line.text for line in lines)

    def test_about_shows_personal_info(self):
        body = "\n".join(texts(section_lines(Section.ABOUT, PORTFOLIO, UNICODE_CHARS, 80)))
        assert PORTFOLIO.personal.name in body
        assert PORTFOLIO.personal.location in body

    def test_contact_shows_email_and_links(self):
        body = "\n".join(texts(section_lines(Section.CONTACT, PORTFOLIO, UNICODE_CHARS, 80)))
        assert PORTFOLIO.contact.email in body
        for link in PORTFOLIO.contact.social:
            assert link.url in body

    def test_projects_list_every_project(self):
        body = "\n".join(texts(section_lines(Section.PROJECTS, PORTFOLIO, UNICODE_CHARS, 80)))
        for project in PORTFOLIO.projects:
            assert project.name in body

    def test_bio_wraps_to_width(self):
        lines = section_lines(Section.ABOUT, PORTFOLIO, UNICODE_CHARS, 40)
        bio = [line for line in lines if line.indent == 2 and line.style == "text"]
        assert len(bio) > 1
        assert all(len(line.text) <= 38 for line in bio)

    def test_ascii_glyphs(self):
        body = "\n".join(texts(section_lines(Section.HOME, PORTFOLIO, ASCII_CHARS, 80)))
        assert "[OK]" in body
        assert "✓" not in body

    def test_broken_panel_falls_back(self, caplog):
        broken = replace(PORTFOLIO, projects=None)
        lines = section_lines(Section.PROJECTS, broken, ASCII_CHARS, 80)
        assert lines[0].text == "[ERROR] Featured Projects failed to load"
        assert lines[0].style == "error"
        assert "Failed to build projects panel" in caplog.text


class TestNavItems:
    """Test the navigation bar entries."""

    def test_marks_current(self):
        items = nav_items(Section.SKILLS)
        assert items[0] == ("[1] Home", False)
        assert items[3] == ("[4] Skills", True)
        assert sum(current for _, current in items) == 1


class TestStatusText:
    """Test the status line."""

    def test_active_session(self):
        status = StatusInfo(width=100, height=30, sections_visited=2)
        assert status_text(status, Capabilities()) == "Terminal: 100x30 | Session: 2 sections visited"

    def test_degraded_terminal_and_ended_session(self):
        status = StatusInfo(width=80, height=24, session_active=False)
        caps = Capabilities(supports_color=False, supports_unicode=False)
        assert status_text(status, caps) == "Terminal: 80x24 (no color) (no unicode) (session ended)"


class TestPortfolioView:
    """Test rendering onto a fake screen."""

    def test_renders_header_nav_and_panel(self, make_screen, plain_caps):
        screen = make_screen()
        view = PortfolioView(screen, plain_caps)

        view.render(Section.CONTACT, StatusInfo(width=120, height=40, sections_visited=1))

        text = screen.text()
        assert HEADER_TITLE in text
        assert "[6] Contact" in text
        assert "CONTACT INFORMATION" in text
        assert PORTFOLIO.contact.email in text
        assert "[6/6]" in text
        assert "Session: 1 sections visited" in text
        assert screen.refreshes == 1

    def test_message_and_warnings_shown(self, make_screen, plain_caps):
        screen = make_screen()
        view = PortfolioView(screen, plain_caps)

        status = StatusInfo(message=ui.TIMEOUT_MESSAGE, warnings=["Terminal width (50) is below minimum (60)"])
        view.render(Section.HOME, status)

        text = screen.text()
        assert ui.TIMEOUT_MESSAGE in text
        assert "below minimum" in text

    def test_tiny_terminal_draws_frame_only(self, make_screen, plain_caps):
        screen = make_screen(height=5, width=5)
        view = PortfolioView(screen, plain_caps)

        view.render(Section.HOME, StatusInfo())

        assert HEADER_TITLE not in screen.text()
        assert (0, 0, "╭") in screen.writes
        assert all(not (y == 4 and x == 4) for y, x, _ in screen.writes)

    def test_nothing_written_out_of_bounds(self, make_screen, plain_caps):
        screen = make_screen(height=20, width=40)
        view = PortfolioView(screen, plain_caps)
        for section in CATALOG:
            view.render(section, StatusInfo(width=40, height=20))
            for y, x, text in screen.writes:
                assert 0 <= y < 20
                assert x + len(text) <= 40

    def test_no_borders(self, make_screen):
        screen = make_screen()
        caps = Capabilities(supports_color=False, supports_unicode=False, supports_borders=False)
        view = PortfolioView(screen, caps)

        view.render(Section.HOME, StatusInfo())

        assert (0, 0, "+" + "-" * 118 + "+") not in screen.writes
        assert "╭" not in screen.text()

    def test_help_screen(self, make_screen, plain_caps):
        screen = make_screen()
        view = PortfolioView(screen, plain_caps)
        view.show_help = True

        view.render(Section.HOME, StatusInfo())

        text = screen.text()
        assert "TERMINAL PORTFOLIO" in text
        assert "Go to contact" in text
        assert HEADER_TITLE not in text

    def test_panel_cache_keeps_current_width_only(self, make_screen, plain_caps):
        screen = make_screen(height=40, width=120)
        view = PortfolioView(screen, plain_caps)
        for section in CATALOG:
            view.render(section, StatusInfo())

        screen.width = 90
        view.render(Section.HOME, StatusInfo())

        assert {width for _, width in view._lines_cache} == {86}
        assert len(view._lines_cache) == 1

    def test_scroll_is_clamped(self, make_screen, plain_caps):
        screen = make_screen(height=20, width=80)
        view = PortfolioView(screen, plain_caps)

        view.scroll(-5, Section.EXPERIENCE)
        assert view.scroll_offset == 0

        view.scroll(10_000, Section.EXPERIENCE)
        total = len(section_lines(Section.EXPERIENCE, PORTFOLIO, view.chars, 76))
        assert view.scroll_offset == total - view.content_height()

        view.reset_scroll()
        assert view.scroll_offset == 0

    def test_long_panel_shows_more_marker(self, make_screen, plain_caps):
        screen = make_screen(height=20, width=80)
        view = PortfolioView(screen, plain_caps)
        view.render(Section.EXPERIENCE, StatusInfo(width=80, height=20))
        assert "[more PgDn]" in screen.text()
