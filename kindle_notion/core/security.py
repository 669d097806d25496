#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
Security utilities
==================
- Static credential check for the single reader account
- Signed session token (JWT) creation/verification
- Session cookie helpers for the UI routes
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Request, Response
from jose import JWTError, jwt

from .config import Settings


# ----------------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------------

def verify_credentials(username: str, password: str, settings: Settings) -> bool:
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_user.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.admin_pass.encode("utf-8"))
    return user_ok and pass_ok


# ----------------------------------------------------------------------------
# Session tokens
# ----------------------------------------------------------------------------

def create_session_token(username: str, settings: Settings) -> str:
    expire = datetime.now(tz=timezone.utc) + timedelta(seconds=settings.session_max_age)
    payload: dict[str, Any] = {
        "sub": username,
        "exp": expire,
        "type": "session",
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


# ----------------------------------------------------------------------------

def decode_session_token(token: str, settings: Settings) -> str | None:
    """Return the token subject, or None if the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except JWTError:
        return None
    if payload.get("type") != "session":
        return None
    return payload.get("sub")


# ----------------------------------------------------------------------------
# Cookie helpers
# ----------------------------------------------------------------------------

def is_authenticated(request: Request, settings: Settings) -> bool:
    token = request.cookies.get(settings.session_cookie)
    if not token:
        return False
    subject = decode_session_token(token, settings)
    return subject is not None and subject == settings.admin_user


# ----------------------------------------------------------------------------

def set_session_cookie(response: Response, username: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie,
        value=create_session_token(username, settings),
        httponly=True,
        secure=settings.session_cookie_secure,
        max_age=settings.session_max_age,
        samesite="lax",
        path="/",
    )


# ----------------------------------------------------------------------------

def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.session_cookie, path="/")


# ----------------------------------------------------------------------------
