from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from teamsite.adapters.clock import FixedClock
from teamsite.adapters.dev_email import DevEmailAdapter
from teamsite.adapters.local_storage import LocalAssetStore
from teamsite.adapters.memory_store import InMemoryDocumentStore
from teamsite.api import deps
from teamsite.api.main import app
from teamsite.api.rate_limit import RateLimiter
from teamsite.config.models import SiteConfig

PUBLIC_BASE = "http://testserver/uploads"


@pytest.fixture
def clock() -> FixedClock:
    """Deterministic clock, one second per reading."""
    return FixedClock(datetime(2025, 1, 1, 12, 0, tzinfo=UTC), step=timedelta(seconds=1))


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def asset_store(tmp_path) -> LocalAssetStore:
    return LocalAssetStore(tmp_path / "uploads", PUBLIC_BASE)


@pytest.fixture
def dev_email() -> DevEmailAdapter:
    return DevEmailAdapter()


@pytest.fixture
def site_config() -> SiteConfig:
    return SiteConfig.model_validate(
        {
            "site": {
                "name": "Team Site",
                "base_url": "https://team.example",
                "admin_inbox": "admin@team.example",
                "sender_name": "Team Site Website",
                "ack_sender_name": "Team Site",
                "contact_lines": ["Email: team@team.example"],
            },
            "sitemap": {
                "static_routes": [
                    {"name": "homepage", "path": "/"},
                    {"name": "about", "path": "/about"},
                    {"name": "blog", "path": "/blog"},
                ]
            },
            "uploads": {
                "max_bytes": 1024,
                "allowed_content_types": ["image/png", "image/jpeg", "audio/mpeg"],
            },
            "rate_limit": {
                "login": {"window_seconds": 60, "max_requests": 3},
                "contact": {"window_seconds": 60, "max_requests": 2},
                "application": {"window_seconds": 60, "max_requests": 2},
            },
        }
    )


# --- API ---

ADMIN_EMAIL = "admin@team.example"


@pytest.fixture
def app_client(store, asset_store, clock, dev_email, site_config) -> Iterator[TestClient]:
    """
    TestClient for the full app, wired to in-memory adapters.

    Services are built by the real dependency graph; only the leaf adapters
    are replaced. Admin routes still require a token (see `admin_client`).
    """
    limiter = RateLimiter(site_config.rate_limit, time_port=clock)
    app.dependency_overrides.update(
        {
            deps.get_site_config: lambda: site_config,
            deps.get_document_store: lambda: store,
            deps.get_asset_store: lambda: asset_store,
            deps.get_clock: lambda: clock,
            deps.get_email_adapter: lambda: dev_email,
            deps.get_rate_limiter: lambda: limiter,
        }
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(app_client: TestClient) -> TestClient:
    app.dependency_overrides[deps.get_current_admin] = lambda: ADMIN_EMAIL
    return app_client
