"""Admin login, logout and session introspection."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from kaptan.auth import (
    AccessContext,
    create_session_token,
    credentials_match,
    get_access_context,
    get_clock,
    get_settings,
)
from kaptan.cookies import cookie_policy_for_request
from kaptan.database import get_db
from kaptan.errors import OutcomeStatus, Unauthenticated
from kaptan.observability import ADMIN_LOGINS
from kaptan.repositories import UserRepository
from kaptan.routers.common import RPC_PREFIX
from kaptan.schemas.common import SuccessResult
from kaptan.schemas.user import AdminLogin, UserRead
from kaptan.security import limiter

logger = logging.getLogger(__name__)

ADMIN_DISPLAY_NAME = "Admin"

router = APIRouter(tags=["auth"])


@router.post("/api/admin-login", response_model=SuccessResult)
@limiter.limit("10/minute")
def admin_login(
    request: Request,
    response: Response,
    payload: AdminLogin,
    db: Session = Depends(get_db),
):
    """Exchange the configured admin credentials for a session cookie."""
    settings = get_settings(request)
    if not credentials_match(payload.username, payload.password, settings):
        ADMIN_LOGINS.labels("rejected").inc()
        logger.warning("Failed admin login for %r", payload.username)
        raise Unauthenticated("Invalid credentials")

    open_id = settings.owner_open_id
    users = UserRepository(db, owner_open_id=open_id, now=get_clock(request))
    outcome = users.upsert(
        open_id,
        {
            "name": ADMIN_DISPLAY_NAME,
            "email": open_id,
            "login_method": "password",
            "last_signed_in": users.now(),
        },
    )
    if outcome.status is OutcomeStatus.HARD_FAILURE:
        outcome.unwrap()
    if not outcome.ok:
        logger.warning("Admin user not recorded: %s", outcome.error)

    token = create_session_token(open_id, ADMIN_DISPLAY_NAME, settings)
    policy = cookie_policy_for_request(request, settings)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_lifetime_seconds,
        **policy.as_cookie_kwargs(),
    )
    ADMIN_LOGINS.labels("accepted").inc()
    logger.info("Admin session issued for %s", open_id)
    return SuccessResult()


@router.get(f"{RPC_PREFIX}/auth.me", response_model=UserRead | None)
def me(ctx: AccessContext = Depends(get_access_context)):
    return ctx.user


@router.post(f"{RPC_PREFIX}/auth.logout", response_model=SuccessResult)
def logout(request: Request, response: Response):
    settings = get_settings(request)
    # Same attributes as on login, otherwise browsers keep the cookie.
    policy = cookie_policy_for_request(request, settings)
    response.delete_cookie(settings.session_cookie_name, **policy.as_cookie_kwargs())
    return SuccessResult()
