"""Portfolio content and validation.

The portfolio is hard-coded; validation exists so edits to PORTFOLIO can be
checked (see tests/test_portfolio.py) before they reach the screen.
"""

import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse


@dataclass
class PersonalInfo:
    name: str
    title: str
    bio: str
    location: str


@dataclass
class SkillCategory:
    category: str
    skills: list[str]


@dataclass
class WorkExperience:
    company: str
    position: str
    duration: str
    location: str
    description: str
    achievements: list[str]
    technologies: list[str] = field(default_factory=list)


@dataclass
class Education:
    institution: str
    degree: str
    duration: str
    field_of_study: Optional[str] = None


@dataclass
class Certification:
    name: str
    issuer: str
    year: str


@dataclass
class Project:
    name: str
    description: str
    technologies: list[str]
    highlights: list[str]
    github_url: Optional[str] = None
    live_url: Optional[str] = None


@dataclass
class SocialLink:
    platform: str
    url: str
    username: str


@dataclass
class ContactInfo:
    email: str
    social: list[SocialLink]
    website: Optional[str] = None


@dataclass
class PortfolioData:
    personal: PersonalInfo
    experience: list[WorkExperience]
    education: list[Education]
    certifications: list[Certification]
    skills: list[SkillCategory]
    projects: list[Project]
    contact: ContactInfo


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def is_valid_url(url: str) -> bool:
    """Accept absolute URLs with a scheme (https://..., mailto:..., tel:...)."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_personal_info(personal: PersonalInfo) -> list[str]:
    errors = []
    if _blank(personal.name):
        errors.append("Name is required")
    if _blank(personal.title):
        errors.append("Title is required")
    if _blank(personal.bio):
        errors.append("Bio is required")
    if _blank(personal.location):
        errors.append("Location is required")
    return errors


def validate_skill_categories(skills: list[SkillCategory]) -> list[str]:
    if not skills:
        return ["At least one skill category is required"]

    errors = []
    for i, category in enumerate(skills, start=1):
        if _blank(category.category):
            errors.append(f"Skill category {i}: Category name is required")
        if not category.skills:
            errors.append(f"Skill category {i}: At least one skill is required")
            continue
        for j, skill in enumerate(category.skills, start=1):
            if _blank(skill):
                errors.append(f"Skill category {i}, skill {j}: Skill name is required")
    return errors


def validate_projects(projects: list[Project]) -> list[str]:
    if not projects:
        return ["At least one project is required"]

    errors = []
    for i, project in enumerate(projects, start=1):
        if _blank(project.name):
            errors.append(f"Project {i}: Name is required")
        if _blank(project.description):
            errors.append(f"Project {i}: Description is required")
        if not project.technologies:
            errors.append(f"Project {i}: At least one technology is required")
        if not project.highlights:
            errors.append(f"Project {i}: At least one highlight is required")
        if project.github_url and not is_valid_url(project.github_url):
            errors.append(f"Project {i}: Invalid GitHub URL")
        if project.live_url and not is_valid_url(project.live_url):
            errors.append(f"Project {i}: Invalid live URL")
    return errors


def validate_social_links(social: list[SocialLink]) -> list[str]:
    if not isinstance(social, list):
        return ["Social links must be a list"]

    errors = []
    for i, link in enumerate(social, start=1):
        if _blank(link.platform):
            errors.append(f"Social link {i}: Platform is required")
        if not is_valid_url(link.url):
            errors.append(f"Social link {i}: Valid URL is required")
        if _blank(link.username):
            errors.append(f"Social link {i}: Username is required")
    return errors


def validate_contact_info(contact: ContactInfo) -> list[str]:
    errors = []
    if not is_valid_email(contact.email):
        errors.append("Valid email address is required")
    if contact.website and not is_valid_url(contact.website):
        errors.append("Invalid website URL")
    errors.extend(validate_social_links(contact.social))
    return errors


def validate_portfolio_data(data: Optional[PortfolioData]) -> list[str]:
    """Collect every problem in the portfolio; empty list means valid."""
    if data is None:
        return ["Portfolio data is required"]
    errors = []
    errors.extend(validate_personal_info(data.personal))
    errors.extend(validate_skill_categories(data.skills))
    errors.extend(validate_projects(data.projects))
    errors.extend(validate_contact_info(data.contact))
    return errors


def is_valid_portfolio_data(data: object) -> bool:
    if not isinstance(data, PortfolioData):
        return False
    return not validate_portfolio_data(data)


PORTFOLIO = PortfolioData(
    personal=PersonalInfo(
        name="Ashik Jyothi",
        title="Lead Full Stack Engineer",
        bio=(
            "Lead Full Stack Engineer with 8+ years of experience building scalable enterprise "
            "applications using Javascript frameworks. Specialized in React, Angular, Node.js, "
            "NestJS, and Express. Proven leadership in delivering high-performance solutions, "
            "with strong expertise in cloud architecture and microservices."
        ),
        location="Kozhikode, Kerala",
    ),
    experience=[
        WorkExperience(
            company="QBurst",
            position="Lead Engineer",
            duration="January 2022 - Present",
            location="Kozhikode, Kerala",
            description=(
                "Leading development of the CAT (Config Automation Tool) module in the SMARTShip "
                "platform for maritime enterprises, streamlining onboarding of new vessels by "
                "automating tag configuration, reducing manual effort by 70%."
            ),
            achievements=[
                "Leading development of CAT module reducing manual effort by 70%",
                "Built interactive Angular-based map UI using OpenLayers for vessel route visualization",
                "Developed NodeJS backend APIs for voyage lifecycle management",
                "Created dynamic formula editor with real-time validation",
                "Architected microservices using NodeJS and NestJS with Apache Cassandra",
                "Integrated Keycloak for authentication and role-based authorization",
                "Collaborated with cross-functional teams in Agile sprints",
            ],
            technologies=["Angular", "NodeJS", "NestJS", "Apache Cassandra", "OpenLayers", "Keycloak"],
        ),
        WorkExperience(
            company="VIZRU (Invigo Softwares Pvt Ltd)",
            position="Senior Software Engineer",
            duration="August 2017 - January 2022",
            location="Kozhikode, Kerala",
            description=(
                "Developed scalable microservices and real-time systems for Vizru's low-code/no-code "
                "platform, including PDF generation services, chat systems, and form builders."
            ),
            achievements=[
                "Built scalable NodeJS microservice for automated PDF generation using Puppeteer",
                "Architected real-time chat system using Socket.io and Redis clustering",
                "Developed dynamic form builder with drag-and-drop functionality",
                "Created centralized real-time communication infrastructure",
                "Implemented multi-tenant architecture with JWT authentication",
                "Built enterprise-grade PDF processing pipeline with advanced features",
            ],
            technologies=["NodeJS", "ReactJS", "Socket.io", "Redis", "Puppeteer", "JWT", "Multi-tenant Architecture"],
        ),
        WorkExperience(
            company="Irisind",
            position="Software Engineer",
            duration="January 2017 - July 2017",
            location="Muvattupuzha, Kerala",
            description=(
                "Developed client-side applications and marketing websites for CRM platforms, "
                "focusing on dynamic dashboards and interactive interfaces."
            ),
            achievements=[
                "Built AngularJS controllers and services for dynamic dashboards",
                "Created interactive agent interfaces with call progress monitoring",
                "Developed live campaign management and call disposition workflows",
                "Built full-stack marketing website for AVOS CRM platform",
                "Developed corporate website for 4Amigos IT services company",
                "Ensured seamless data flow between frontend and backend systems",
            ],
            technologies=["AngularJS", "NodeJS", "MySQL", "HTML5", "CSS3", "Javascript", "Express"],
        ),
    ],
    education=[
        Education(
            institution="HMS Institute of Technology",
            degree="Bachelor of Engineering (Computer Science)",
            duration="March 2010 - March 2016",
        ),
    ],
    certifications=[
        Certification(name="Kubernetes Administration and Implementation", issuer="Udemy", year="2022"),
    ],
    skills=[
        SkillCategory("Programming Languages", ["Javascript", "Typescript", "Python"]),
        SkillCategory(
            "Libraries/Frameworks",
            ["Node.js", "NestJS", "Express", "Next.js", "React", "Redux", "Angular",
             "Tailwind CSS", "Bootstrap", "Jest", "GraphQL"],
        ),
        SkillCategory(
            "Tools",
            ["Docker", "Kubernetes", "Helm", "Terraform", "Git", "Vite", "Webpack", "Jira",
             "Agile methodologies"],
        ),
        SkillCategory("Database", ["Cassandra", "MongoDB", "SQL", "Redis"]),
        SkillCategory("Cloud Services", ["AWS (S3, EC2, Lambda, SQS)", "GCP"]),
        SkillCategory("Operating Systems", ["Linux"]),
    ],
    projects=[
        Project(
            name="SMARTShip CAT Module",
            description=(
                "Config Automation Tool for the SMARTShip maritime platform, streamlining onboarding "
                "of new vessels by automating tag configuration."
            ),
            technologies=["Angular", "NodeJS", "NestJS", "Apache Cassandra", "Keycloak"],
            highlights=[
                "Automated vessel onboarding reducing manual effort by 70%",
                "Dynamic formula editor with real-time validation",
                "Microservices architecture with scalable data storage",
                "Integration with Keycloak for authentication and authorization",
            ],
        ),
        Project(
            name="TFOC Interactive Map UI",
            description=(
                "Angular map UI built on OpenLayers to visualize planned vs forecasted vessel routes "
                "for the Total Fuel Oil Consumption module."
            ),
            technologies=["Angular", "OpenLayers", "NodeJS", "Apache Cassandra"],
            highlights=[
                "Interactive map visualization for vessel routes",
                "Real-time comparison of planned vs forecasted routes",
                "Integration with voyage lifecycle management APIs",
            ],
        ),
        Project(
            name="Vizru PDF Generation Service",
            description=(
                "NodeJS microservice for automated PDF generation from dashboards using Puppeteer "
                "and Redis-based job queuing."
            ),
            technologies=["NodeJS", "Puppeteer", "Redis", "PDF Processing"],
            highlights=[
                "Automated PDF generation from complex dashboards",
                "Redis-based job queuing for scalable processing",
                "Pagination, watermarking and merge support",
            ],
        ),
        Project(
            name="Real-time Chat System",
            description=(
                "Scalable real-time chat using Socket.io, Redis clustering and JWT authentication "
                "for a low-code workflow builder platform."
            ),
            technologies=["Socket.io", "Redis", "JWT", "NodeJS", "Multi-tenant Architecture"],
            highlights=[
                "Real-time communication with Socket.io and Redis clustering",
                "Multi-tenant architecture with guest-admin interactions",
                "Automated workflow triggering from chat interactions",
            ],
        ),
        Project(
            name="Dynamic Form Builder",
            description=(
                "ReactJS form builder with drag-and-drop construction, multi-layout templates and "
                "wizard workflows."
            ),
            technologies=["ReactJS", "Drag-and-Drop", "Form Validation", "Workflow Engine"],
            highlights=[
                "Drag-and-drop form construction interface",
                "Real-time validation and conditional field rendering",
            ],
        ),
    ],
    contact=ContactInfo(
        email="ashikjyothi@gmail.com",
        website="https://dev.ashikjyothi.in",
        social=[
            SocialLink("LinkedIn", "https://linkedin.com/in/ashikjyothi", "ashikjyothi"),
            SocialLink("GitHub", "https://github.com/ashik-jyothi", "ashik-jyothi"),
            SocialLink("Portfolio", "https://dev.ashikjyothi.in", "dev.ashikjyothi.in"),
        ],
    ),
)
