"""Tests for the portfolio content and its validators."""

from dataclasses import replace

import pytest

from terminal_portfolio.portfolio import (
    PORTFOLIO,
    ContactInfo,
    PersonalInfo,
    Project,
    SkillCategory,
    SocialLink,
    is_valid_email,
    is_valid_portfolio_data,
    is_valid_url,
    validate_contact_info,
    validate_personal_info,
    validate_portfolio_data,
    validate_projects,
    validate_skill_categories,
    validate_social_links,
)


def make_project(**overrides):
    project = Project(
        name="Tool",
        description="Does things",
        technologies=["Python"],
        highlights=["Fast"],
    )
    return replace(project, **overrides)


class TestPortfolioContent:
    """The shipped portfolio must always validate."""

    def test_portfolio_is_valid(self):
        assert validate_portfolio_data(PORTFOLIO) == []
        assert is_valid_portfolio_data(PORTFOLIO)

    def test_has_content_for_every_section(self):
        assert PORTFOLIO.personal.name
        assert PORTFOLIO.experience
        assert PORTFOLIO.skills
        assert PORTFOLIO.projects
        assert PORTFOLIO.contact.social


class TestFieldValidators:
    """Test email and URL checks."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@example.org"])
    def test_valid_email(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "a b@c.d", "@b.co"])
    def test_invalid_email(self, email):
        assert not is_valid_email(email)

    @pytest.mark.parametrize("url", ["https://example.com", "http://x.io/path", "mailto:a@b.co"])
    def test_valid_url(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize("url", ["", "example.com", "not a url", "https://"])
    def test_invalid_url(self, url):
        assert not is_valid_url(url)


class TestSectionValidators:
    """Test per-section validation messages."""

    def test_personal_info(self):
        errors = validate_personal_info(PersonalInfo(name=" ", title="", bio="Bio", location=""))
        assert errors == ["Name is required", "Title is required", "Location is required"]

    def test_skill_categories(self):
        assert validate_skill_categories([]) == ["At least one skill category is required"]
        errors = validate_skill_categories([
            SkillCategory(category="", skills=["Go"]),
            SkillCategory(category="Tools", skills=[]),
            SkillCategory(category="Langs", skills=["Python", " "]),
        ])
        assert errors == [
            "Skill category 1: Category name is required",
            "Skill category 2: At least one skill is required",
            "Skill category 3, skill 2: Skill name is required",
        ]

    def test_projects(self):
        assert validate_projects([]) == ["At least one project is required"]
        assert validate_projects([make_project()]) == []

        errors = validate_projects([
            make_project(name=""),
            make_project(technologies=[], highlights=[], github_url="nope", live_url="also nope"),
        ])
        assert errors == [
            "Project 1: Name is required",
            "Project 2: At least one technology is required",
            "Project 2: At least one highlight is required",
            "Project 2: Invalid GitHub URL",
            "Project 2: Invalid live URL",
        ]

    def test_social_links(self):
        assert validate_social_links("oops") == ["Social links must be a list"]
        assert validate_social_links([]) == []
        errors = validate_social_links([SocialLink(platform="", url="bad", username="")])
        assert errors == [
            "Social link 1: Platform is required",
            "Social link 1: Valid URL is required",
            "Social link 1: Username is required",
        ]

    def test_contact_info(self):
        contact = ContactInfo(email="nope", social=[], website="bad")
        assert validate_contact_info(contact) == ["Valid email address is required", "Invalid website URL"]
        assert validate_contact_info(ContactInfo(email="a@b.co", social=[])) == []


class TestPortfolioValidation:
    """Test whole-portfolio validation."""

    def test_missing_data(self):
        assert validate_portfolio_data(None) == ["Portfolio data is required"]
        assert not is_valid_portfolio_data(None)
        assert not is_valid_portfolio_data({"personal": {}})

    def test_errors_collected_across_sections(self):
        broken = replace(
            PORTFOLIO,
            personal=replace(PORTFOLIO.personal, name=""),
            contact=replace(PORTFOLIO.contact, email="broken"),
        )
        errors = validate_portfolio_data(broken)
        assert "Name is required" in errors
        assert "Valid email address is required" in errors
        assert not is_valid_portfolio_data(broken)
