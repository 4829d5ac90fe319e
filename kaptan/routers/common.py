"""Helpers shared by the RPC routers."""

from __future__ import annotations

from kaptan.auth import AccessContext

RPC_PREFIX = "/api/rpc"


def visible_only(requested: bool | None, ctx: AccessContext) -> bool:
    """Public callers always get the filtered view.

    Admins get it too unless they explicitly ask for everything.
    """
    if ctx.is_admin and requested is False:
        return False
    return True
