"""Reusable demo stages and base pipelines shared by the example scripts."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from serverfn import (
    ForbiddenError,
    ServerFnConfig,
    UnauthorizedError,
    create_server_fn,
    extend,
)


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    role: str = "user"


# Mock session store
SESSIONS = {
    "user-token": User("1", "test@example.com", "Test User"),
    "admin-token": User("2", "admin@example.com", "Admin User", role="admin"),
}


def auth_stage(token: str | None):
    """Stage that resolves *token* to ``ctx['user']`` or refuses the call."""

    async def authenticate(ctx):
        await asyncio.sleep(0)  # pretend to hit the session store
        user = SESSIONS.get(token or "")
        if user is None:
            raise UnauthorizedError("Login required")
        return extend(ctx, user=user)

    return authenticate


async def require_admin(ctx):
    if ctx["user"].role != "admin":
        raise ForbiddenError("Admin required")
    return extend(ctx, is_admin=True)


def authed(token: str | None, config: ServerFnConfig | None = None):
    return create_server_fn(config).with_stage(auth_stage(token))


def admin(token: str | None, config: ServerFnConfig | None = None):
    return authed(token, config).with_stage(require_admin)
