"""Session cookie attributes for local and cross-subdomain deployments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from starlette.requests import Request

from kaptan.config import Settings

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
FORWARDED_PROTO_HEADER = "x-forwarded-proto"

_IPV4_RE = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")


@dataclass(frozen=True, slots=True)
class CookiePolicy:
    domain: str | None
    secure: bool
    samesite: Literal["none", "lax"]
    httponly: bool = True
    path: str = "/"

    def as_cookie_kwargs(self) -> dict[str, object]:
        """Keyword arguments shared by ``set_cookie`` and ``delete_cookie``."""
        return {
            "domain": self.domain,
            "secure": self.secure,
            "samesite": self.samesite,
            "httponly": self.httponly,
            "path": self.path,
        }


def is_ip_address(host: str) -> bool:
    # Dotted quad, or anything with a colon is treated as IPv6.
    if _IPV4_RE.match(host):
        return True
    return ":" in host


def cookie_domain_for_host(hostname: str, override: str | None = None) -> str | None:
    """Best-effort eTLD+1 with a leading dot, or None for host-only cookies.

    Wrong for multi-part public suffixes such as ``.co.uk``; deployments on
    those must set ``SESSION_COOKIE_DOMAIN``.
    """
    if override:
        return override
    if not hostname:
        return None
    if hostname in LOCAL_HOSTS or is_ip_address(hostname):
        return None

    parts = [part for part in hostname.split(".") if part]
    if len(parts) >= 2:
        return "." + ".".join(parts[-2:])
    return None


def is_secure_transport(protocol: str | None, forwarded_proto: str | None) -> bool:
    """True for direct HTTPS or when a proxy reports HTTPS.

    The forwarded header is trusted as-is; only expose the app behind a proxy
    that overwrites it.
    """
    if (protocol or "").lower() == "https":
        return True
    if not forwarded_proto:
        return False
    return any(
        proto.strip().lower() == "https" for proto in forwarded_proto.split(",")
    )


def resolve_cookie_policy(
    hostname: str | None,
    *,
    protocol: str | None = None,
    forwarded_proto: str | None = None,
    override_domain: str | None = None,
) -> CookiePolicy:
    secure = is_secure_transport(protocol, forwarded_proto)
    return CookiePolicy(
        domain=cookie_domain_for_host(hostname or "", override_domain),
        secure=secure,
        # Browsers drop cross-site cookies unless SameSite=None is paired
        # with Secure.
        samesite="none" if secure else "lax",
    )


def cookie_policy_for_request(request: Request, settings: Settings) -> CookiePolicy:
    return resolve_cookie_policy(
        request.url.hostname,
        protocol=request.url.scheme,
        forwarded_proto=request.headers.get(FORWARDED_PROTO_HEADER),
        override_domain=settings.session_cookie_domain,
    )
