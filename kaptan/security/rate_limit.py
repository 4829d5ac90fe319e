from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed on client address; behind a proxy uvicorn's --proxy-headers sets it.
limiter = Limiter(key_func=get_remote_address, headers_enabled=False)
