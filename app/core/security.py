import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.core.config import settings

# auto_error is off so the check can be switched off through settings.
basic_auth = HTTPBasic(auto_error=False)


def verify_admin_credentials(username: str, password: str) -> bool:
    """Compares a username/password pair against the configured admin account."""
    username_ok = secrets.compare_digest(
        username.encode("utf-8"), settings.ADMIN_EMAIL.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    )
    return username_ok and password_ok


def get_current_admin(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
) -> Optional[str]:
    """
    Dependency for HTTP Basic authentication of mutating catalog routes.
    Returns the admin username, or None when the check is disabled.
    """
    if not settings.REQUIRE_ADMIN_AUTH:
        return None

    if credentials is None or not verify_admin_credentials(
        credentials.username, credentials.password
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
