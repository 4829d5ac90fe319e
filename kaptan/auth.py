"""Session tokens and the per-request access context."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi_users.jwt import decode_jwt, generate_jwt
from sqlalchemy.orm import Session

from kaptan.config import Settings
from kaptan.database import get_db
from kaptan.errors import Forbidden, StoreUnavailableError, Unauthenticated
from kaptan.models.user import User
from kaptan.repositories import UserRepository
from kaptan.upsert import Clock, utcnow

logger = logging.getLogger(__name__)

SESSION_AUDIENCE = "kaptan:session"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


# ==========================================
# Session tokens
# ==========================================
def create_session_token(open_id: str, name: str | None, settings: Settings) -> str:
    return generate_jwt(
        {"sub": open_id, "name": name, "aud": [SESSION_AUDIENCE]},
        settings.secret_key,
        lifetime_seconds=settings.session_lifetime_seconds,
    )


def verify_session_token(token: str, settings: Settings) -> dict | None:
    """Return the token claims, or None for an invalid/expired token."""
    try:
        claims = decode_jwt(token, settings.secret_key, [SESSION_AUDIENCE])
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None
    if not claims.get("sub"):
        return None
    return claims


def _same_secret(supplied: str, expected: str) -> bool:
    return secrets.compare_digest(supplied.encode(), expected.encode())


def credentials_match(username: str, password: str, settings: Settings) -> bool:
    # Both halves are always compared.
    username_ok = _same_secret(username, settings.admin_username)
    password_ok = _same_secret(password, settings.admin_password)
    return username_ok and password_ok


metrics_basic_auth = HTTPBasic(realm="metrics")


def require_metrics_credentials(
    request: Request,
    credentials: HTTPBasicCredentials = Depends(metrics_basic_auth),
) -> str:
    """Guard for the scrape endpoint; open when no metrics password is set."""
    settings = get_settings(request)
    if not settings.metrics_password:
        return credentials.username
    username_ok = _same_secret(credentials.username, settings.metrics_username)
    password_ok = _same_secret(credentials.password, settings.metrics_password)
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": 'Basic realm="metrics"'},
        )
    return credentials.username


# ==========================================
# Access context
# ==========================================
@dataclass(frozen=True, slots=True)
class AccessContext:
    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin


ANONYMOUS = AccessContext()


def build_access_context(
    request: Request, db: Session, settings: Settings, *, now: Clock = utcnow
) -> AccessContext:
    """Resolve the session cookie to a stored user, or an anonymous context."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return ANONYMOUS
    claims = verify_session_token(token, settings)
    if claims is None:
        return ANONYMOUS

    open_id = claims["sub"]
    users = UserRepository(db, owner_open_id=settings.owner_open_id, now=now)
    try:
        user = users.get_by_open_id(open_id)
    except StoreUnavailableError:
        logger.warning("Cannot resolve session user %s; treating as anonymous", open_id)
        return ANONYMOUS

    # Best-effort "last signed in" touch; recreates the row if it vanished.
    fields: dict[str, object] = {"last_signed_in": users.now()}
    if user is None:
        fields["name"] = claims.get("name")
    outcome = users.upsert(open_id, fields)
    if outcome.ok:
        user = outcome.value
    else:
        logger.warning("Session bookkeeping skipped for %s: %s", open_id, outcome.error)

    if user is None:
        return ANONYMOUS
    return AccessContext(user=user)


def get_access_context(
    request: Request,
    db: Session = Depends(get_db),
) -> AccessContext:
    return build_access_context(
        request, db, get_settings(request), now=get_clock(request)
    )


def require_user(ctx: AccessContext = Depends(get_access_context)) -> User:
    if ctx.user is None:
        raise Unauthenticated()
    return ctx.user


def require_admin(user: User = Depends(require_user)) -> User:
    if not user.is_admin:
        raise Forbidden()
    return user
