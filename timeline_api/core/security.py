"""
Admin gate for the event endpoints.

The timeline service is called by the photo platform's admin tooling,
never by end users, so one shared key in `X-Api-Key` is all it checks.
With `API_KEY` unset every request is let through.
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from timeline_api.core.config import get_settings

_admin_key_header = APIKeyHeader(
    name="X-Api-Key",
    auto_error=False,
    description="Admin key shared with the photo platform. "
                "Required only when the server sets `API_KEY`.",
)

_UNAUTHORIZED = {
    "error": "unauthorized",
    "message": "Missing or invalid X-Api-Key header.",
}


def _is_admin_key(presented: str | None, expected: str) -> bool:
    return bool(presented) and secrets.compare_digest(presented.encode(), expected.encode())


async def require_admin_key(
    presented: Annotated[str | None, Security(_admin_key_header)],
) -> None:
    expected = get_settings().api_key
    if expected and not _is_admin_key(presented, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_UNAUTHORIZED,
            headers={"WWW-Authenticate": "ApiKey"},
        )


AuthDep = Annotated[None, Depends(require_admin_key)]
