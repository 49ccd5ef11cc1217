"""
Admin credentials and bearer tokens.

The site has a single admin account, configured by ADMIN_EMAIL and
ADMIN_PASSWORD_HASH (argon2). Tokens are HS256 JWTs whose subject is that
email; they expire ADMIN_TOKEN_TTL after issue, measured on the app clock.
"""

import logging
import os
from datetime import datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

SECRET_KEY = os.environ.get("TEAMSITE_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
ADMIN_TOKEN_TTL = timedelta(hours=24)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def check_admin_credentials(
    email: str,
    password: str,
    admin_email: str,
    password_hash: str,
) -> bool:
    """True when email matches the admin (case-insensitive) and the password verifies."""
    if not admin_email or not password_hash:
        return False
    if email.strip().lower() != admin_email.lower():
        return False
    try:
        return bool(pwd_context.verify(password, password_hash))
    except ValueError:
        logger.error("ADMIN_PASSWORD_HASH is not a recognised argon2 hash")
        return False


def create_admin_token(email: str, now: datetime) -> str:
    claims = {"sub": email, "iat": now, "exp": now + ADMIN_TOKEN_TTL}
    token: str = jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)
    return token


def admin_from_token(token: str, admin_email: str, now: datetime) -> str | None:
    """
    Admin email carried by a token, or None.

    None covers bad signatures, expired tokens and tokens issued to any
    subject other than the configured admin.
    """
    try:
        claims = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        return None

    expires = claims.get("exp")
    if not isinstance(expires, int | float) or expires <= now.timestamp():
        return None
    subject = claims.get("sub")
    if not admin_email or subject != admin_email:
        return None
    return admin_email
