import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm

from teamsite.api.auth_utils import check_admin_credentials, create_admin_token
from teamsite.api.deps import (
    Settings,
    client_address,
    get_clock,
    get_current_admin,
    get_rate_limiter,
    get_settings,
)
from teamsite.api.errors import rate_limited
from teamsite.api.rate_limit import RateLimiter
from teamsite.api.schemas import Token
from teamsite.core.ports.time import TimePort

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
def login_for_access_token(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    settings: Settings = Depends(get_settings),
    limiter: RateLimiter = Depends(get_rate_limiter),
    clock: TimePort = Depends(get_clock),
) -> Token:
    """Authenticate the site admin and return a bearer token."""
    ip = client_address(request)
    if not limiter.check_login(ip):
        logger.warning("Login rate limit hit for %s", ip)
        raise rate_limited("login")

    if not check_admin_credentials(
        form_data.username,
        form_data.password,
        settings.admin_email,
        settings.admin_password_hash,
    ):
        logger.info("Failed admin login from %s", ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_admin_token(settings.admin_email, clock.now_utc())
    return Token(access_token=token, token_type="bearer")


@router.get("/me")
def read_admin_me(admin: str = Depends(get_current_admin)) -> dict[str, str]:
    """Get current admin info."""
    return {"email": admin}
