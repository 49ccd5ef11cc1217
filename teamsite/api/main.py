import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamsite.api.deps import get_document_store, get_settings, get_site_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load site config and open the store on startup (fail-fast)
    try:
        get_site_config()
        get_document_store()
        logger.info("Site config loaded from %s", settings.config_path)
    except (OSError, ValueError) as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Team Site API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from teamsite.api.routes import (  # noqa: E402
    auth,
    content,
    email,
    forms,
    settings,
    sitemap,
    uploads,
)

# Order matters: fixed paths before the /api/{entity} catch-alls
app.include_router(sitemap.router, tags=["Sitemap"])
app.include_router(email.router, tags=["Email"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(forms.router, prefix="/api", tags=["Forms"])
app.include_router(settings.public_router, prefix="/api/settings", tags=["Settings"])
app.include_router(settings.admin_router, prefix="/api/admin", tags=["Admin Settings"])
app.include_router(content.admin_router, prefix="/api/admin", tags=["Admin Content"])
app.include_router(content.public_router, prefix="/api", tags=["Public"])
app.include_router(uploads.router, prefix="/uploads", tags=["Uploads"])


def _cors_origins() -> list[str]:
    try:
        return get_site_config().cors_origins
    except (OSError, ValueError):
        # Lifespan reports the config failure
        return ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
