"""
Document models for every collection.

Documents are stored with camelCase keys (the wire format shared with the
public site). Models expose snake_case attributes and validate on
`model_validate(doc)`; `to_document()` dumps back to camelCase.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
HackathonStatus = Literal["upcoming", "ongoing", "completed"]
ProjectStatus = Literal["upcoming", "ongoing", "completed", "paused"]
BlogStatus = Literal["draft", "published"]
ApplicationStatus = Literal["pending", "reviewed", "accepted", "rejected"]
ContactStatus = Literal["unread", "read"]
ChangeFrequency = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


class Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_document(self) -> dict[str, Any]:
        """Dump as a camelCase document, without the store-assigned id."""
        return self.model_dump(by_alias=True, exclude={"id"})


# --- Team & Events ---

class TeamMember(Document):
    name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    description: str = ""
    skills: list[str] = Field(default_factory=list)
    email: str | None = None
    linkedin: str | None = None
    github: str | None = None
    image_url: str | None = None


class Hackathon(Document):
    title: str = Field(min_length=1)
    description: str = ""
    date: str = Field(min_length=1)
    location: str = ""
    status: HackathonStatus = "upcoming"
    result: str | None = None
    technologies: list[str] = Field(default_factory=list)
    team_size: int | None = Field(default=None, ge=1)
    prize: str | None = None
    image_url: str | None = None


# --- Showcase content (slugged, multi-image) ---

class Achievement(Document):
    title: str = Field(min_length=1)
    slug: str = ""
    description: str = ""
    date: str = Field(min_length=1)
    location: str | None = None
    category: str = ""
    position: str | None = None
    prize: str | None = None
    team_members: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    featured_image: str | None = None


class Project(Document):
    title: str = Field(min_length=1)
    slug: str = ""
    description: str = ""
    content: str = ""
    category: str = ""
    status: ProjectStatus = "upcoming"
    technologies: list[str] = Field(default_factory=list)
    team_members: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    github_url: str | None = None
    live_url: str | None = None
    featured: bool = False
    images: list[str] = Field(default_factory=list)
    featured_image: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None


class Blog(Document):
    title: str = Field(min_length=1)
    slug: str = ""
    content: str = ""
    excerpt: str | None = None
    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    status: BlogStatus = "draft"
    featured_image: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    published_at: str | None = None
    reading_time: int = 0


# --- Inbound forms ---

class PersonalInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = ""
    college: str = ""
    branch: str = ""
    year: str = ""
    preferred_role: str = ""
    experience: str | None = None
    motivation: str = ""

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        # Forms post the year as a number or a label ("3rd")
        return str(value) if isinstance(value, int) else value


class QuizResults(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    score: float = Field(ge=0, le=100)
    correct_answers: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    passed: bool
    time_spent: int = Field(default=0, ge=0)


class InterviewSlot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    date: str
    time: str
    mode: str = ""


class Application(Document):
    personal_info: PersonalInfo
    quiz_results: QuizResults | None = None
    interview_slot: InterviewSlot | None = None
    status: ApplicationStatus = "pending"


class ContactMessage(Document):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: str = ""
    message: str = Field(min_length=1)
    status: ContactStatus = "unread"


# --- Settings singletons ---

class SettingsDocument(Document):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class WelcomeSettings(SettingsDocument):
    enabled: bool = True
    message: str = ""
    welcome_messages: list[str] = Field(default_factory=list)
    click_sound_url: str = ""


class SEOSettings(SettingsDocument):
    global_title: str = ""
    global_description: str = ""
    global_keywords: str = ""
    site_name: str = ""
    twitter_handle: str = ""
    facebook_app_id: str = ""
    google_analytics_id: str = ""
    google_search_console_code: str = ""
    facebook_pixel_id: str = ""
    header_scripts: str = ""
    footer_scripts: str = ""
    robots_txt: str = "User-agent: *\nAllow: /"
    sitemap_url: str = ""


class Benefit(BaseModel):
    icon: str = ""
    title: str
    description: str = ""


class JoinTeamSettings(SettingsDocument):
    enabled: bool = True
    title: str = "Join Our Team"
    description: str = ""
    benefits: list[Benefit] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)


class DonationGoal(BaseModel):
    title: str
    description: str = ""
    amount: float = Field(ge=0)
    raised: float = Field(default=0, ge=0)


class DonationSettings(SettingsDocument):
    enabled: bool = True
    title: str = "Support Our Innovation"
    description: str = ""
    upi_id: str = ""
    paypal_email: str = ""
    donation_goals: list[DonationGoal] = Field(default_factory=list)
    thank_you_message: str = ""
    minimum_amount: float = Field(default=100, ge=0)
    suggested_amounts: list[float] = Field(default_factory=list)


class Theme(SettingsDocument):
    """UI theme value object, passed to rendering instead of mutating global styles."""

    primary_color: str = Field(default="#00D4FF", pattern=r"^#[0-9A-Fa-f]{6}$")
    secondary_color: str = Field(default="#39FF14", pattern=r"^#[0-9A-Fa-f]{6}$")
    accent_color: str = Field(default="#8B5CF6", pattern=r"^#[0-9A-Fa-f]{6}$")
    background_color: str = Field(default="#0F172A", pattern=r"^#[0-9A-Fa-f]{6}$")
    card_background: str = Field(default="#1E293B", pattern=r"^#[0-9A-Fa-f]{6}$")
    text_color: str = Field(default="#FFFFFF", pattern=r"^#[0-9A-Fa-f]{6}$")
    muted_text_color: str = Field(default="#94A3B8", pattern=r"^#[0-9A-Fa-f]{6}$")
    border_radius: str = "12"
    spacing: str = "6"
    font_family: str = "Inter"
    header_style: str = "gradient"
    button_style: str = "rounded"
    animation_speed: Literal["slow", "normal", "fast"] = "normal"


DEFAULT_SITEMAP_PRIORITY = {
    "homepage": "1.0",
    "about": "0.8",
    "team": "0.8",
    "achievements": "0.9",
    "projects": "0.9",
    "blog": "0.9",
    "contact": "0.7",
    "join": "0.8",
    "donate": "0.6",
}


class SitemapSettings(SettingsDocument):
    enabled: bool = True
    base_url: str = "https://example.org"
    include_blogs: bool = True
    include_achievements: bool = True
    include_projects: bool = True
    change_frequency: ChangeFrequency = "weekly"
    priority: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SITEMAP_PRIORITY))
    last_generated: str | None = None
    generated_sitemap: str | None = None
