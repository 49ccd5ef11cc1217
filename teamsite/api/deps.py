import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from teamsite.adapters.clock import SystemClock
from teamsite.adapters.dev_email import DevEmailAdapter
from teamsite.adapters.local_storage import LocalAssetStore
from teamsite.adapters.memory_store import InMemoryDocumentStore
from teamsite.adapters.smtp_email import SMTPConfig, SMTPEmailAdapter
from teamsite.adapters.sqlite_store import SQLiteDocumentStore
from teamsite.api.auth_utils import admin_from_token
from teamsite.api.rate_limit import RateLimiter
from teamsite.components.content import ENTITIES, ContentService, UploadPolicy
from teamsite.components.notifications import NotificationRelay, RelayConfig
from teamsite.components.settings import SettingsService
from teamsite.components.sitemap import SitemapSynthesizer, StaticPage
from teamsite.config.loader import load_config
from teamsite.config.models import SiteConfig
from teamsite.core.ports.db import DocumentStorePort
from teamsite.core.ports.email import EmailAddress, EmailPort
from teamsite.core.ports.time import TimePort

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        data_dir = os.environ.get("TEAMSITE_DATA_DIR", "./data")
        self.db_path = f"{data_dir}/teamsite.db"
        self.uploads_dir = Path(f"{data_dir}/uploads")
        self.store_backend = os.environ.get("TEAMSITE_STORE_BACKEND", "sqlite")
        self.public_base_url = os.environ.get(
            "TEAMSITE_PUBLIC_BASE_URL", "http://localhost:8000"
        ).rstrip("/")
        self.config_path = Path(os.environ.get("TEAMSITE_CONFIG", str(self.base_dir / "site.yaml")))

        self.admin_email = os.environ.get("ADMIN_EMAIL", "")
        self.admin_password_hash = os.environ.get("ADMIN_PASSWORD_HASH", "")

        self.email_backend = os.environ.get("TEAMSITE_EMAIL_BACKEND", "dev")
        self.smtp_host = os.environ.get("SMTP_HOST", "")
        self.smtp_port = int(os.environ.get("SMTP_PORT", "465"))
        self.smtp_use_ssl = _env_flag("SMTP_USE_SSL", True)
        self.email_user = os.environ.get("EMAIL_USER", "")
        self.email_pass = os.environ.get("EMAIL_PASS", "")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Site config ---
@lru_cache
def get_site_config() -> SiteConfig:
    return load_config(get_settings().config_path)


# --- Adapters ---
@lru_cache
def get_document_store() -> DocumentStorePort:
    settings = get_settings()
    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    if settings.store_backend != "sqlite":
        raise ValueError(f"Unknown TEAMSITE_STORE_BACKEND: {settings.store_backend}")
    Path(settings.db_path).parent.mkdir(parents=True, exist_ok=True)
    return SQLiteDocumentStore(settings.db_path)


@lru_cache
def get_asset_store() -> LocalAssetStore:
    settings = get_settings()
    return LocalAssetStore(settings.uploads_dir, f"{settings.public_base_url}/uploads")


@lru_cache
def get_email_adapter() -> EmailPort:
    settings = get_settings()
    if settings.email_backend == "smtp":
        return SMTPEmailAdapter(
            SMTPConfig(
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.email_user,
                password=settings.email_pass,
                use_ssl=settings.smtp_use_ssl,
            ),
            default_sender=EmailAddress(settings.email_user),
        )
    if settings.email_backend != "dev":
        raise ValueError(f"Unknown TEAMSITE_EMAIL_BACKEND: {settings.email_backend}")
    return DevEmailAdapter()


def get_clock() -> TimePort:
    return SystemClock()


@lru_cache
def get_rate_limiter() -> RateLimiter:
    return RateLimiter(get_site_config().rate_limit)


# --- Component Services ---
def get_upload_policy(config: SiteConfig = Depends(get_site_config)) -> UploadPolicy:
    return UploadPolicy(
        max_bytes=config.uploads.max_bytes,
        allowed_content_types=frozenset(config.uploads.allowed_content_types),
    )


def get_content_services(
    store: DocumentStorePort = Depends(get_document_store),
    assets: LocalAssetStore = Depends(get_asset_store),
    clock: TimePort = Depends(get_clock),
    policy: UploadPolicy = Depends(get_upload_policy),
) -> dict[str, ContentService]:
    """One content service per catalogued entity, keyed by route name."""
    return {
        name: ContentService(spec, store, assets, clock, upload_policy=policy)
        for name, spec in ENTITIES.items()
    }


def get_settings_service(
    store: DocumentStorePort = Depends(get_document_store),
    assets: LocalAssetStore = Depends(get_asset_store),
    clock: TimePort = Depends(get_clock),
    policy: UploadPolicy = Depends(get_upload_policy),
) -> SettingsService:
    return SettingsService(store, clock, assets=assets, upload_policy=policy)


def get_sitemap_synthesizer(
    services: dict[str, ContentService] = Depends(get_content_services),
    settings_service: SettingsService = Depends(get_settings_service),
    clock: TimePort = Depends(get_clock),
    config: SiteConfig = Depends(get_site_config),
) -> SitemapSynthesizer:
    return SitemapSynthesizer(
        blogs=services["blogs"],
        achievements=services["achievements"],
        projects=services["projects"],
        clock=clock,
        settings=settings_service,
        static_pages=[StaticPage(r.name, r.path) for r in config.sitemap.static_routes],
        base_url=config.site.base_url,
        default_priority=config.sitemap.default_priority,
    )


def get_notification_relay(
    email: EmailPort = Depends(get_email_adapter),
    clock: TimePort = Depends(get_clock),
    config: SiteConfig = Depends(get_site_config),
    settings: Settings = Depends(get_settings),
) -> NotificationRelay:
    site = config.site
    return NotificationRelay(
        email,
        RelayConfig(
            admin_inbox=site.admin_inbox,
            sender_email=settings.email_user or site.admin_inbox,
            site_name=site.name,
            sender_name=site.sender_name or f"{site.name} Website",
            ack_sender_name=site.ack_sender_name or site.name,
            tagline=site.tagline,
            contact_lines=tuple(site.contact_lines),
        ),
        clock,
    )


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_current_admin(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    settings: Settings = Depends(get_settings),
    clock: TimePort = Depends(get_clock),
) -> str:
    """Email of the authenticated admin, from the bearer token."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin = admin_from_token(token, settings.admin_email, clock.now_utc())
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return admin
