from pydantic import BaseModel, Field


class SiteInfo(BaseModel):
    name: str
    base_url: str
    admin_inbox: str
    sender_name: str = ""
    ack_sender_name: str = ""
    tagline: str = ""
    contact_lines: list[str] = Field(default_factory=list)


class StaticRoute(BaseModel):
    name: str
    path: str


class SitemapConfig(BaseModel):
    static_routes: list[StaticRoute]
    default_priority: str = "0.5"


class UploadRules(BaseModel):
    max_bytes: int = Field(gt=0)
    allowed_content_types: list[str]


class RateLimitWindow(BaseModel):
    window_seconds: int = Field(gt=0)
    max_requests: int = Field(ge=0)


class RateLimitRules(BaseModel):
    login: RateLimitWindow
    contact: RateLimitWindow
    application: RateLimitWindow


class SiteConfig(BaseModel):
    site: SiteInfo
    sitemap: SitemapConfig
    uploads: UploadRules
    rate_limit: RateLimitRules
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
