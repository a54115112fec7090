#!/usr/bin/env python3
"""Authentication-style stages and endpoints derived from shared bases."""

from __future__ import annotations

import asyncio
import logging

import pydantic

from middleware import admin, authed
from serverfn import ServerFnConfig, configure_logging

config = ServerFnConfig.from_env()
configure_logging(config)
logging.basicConfig(level=logging.INFO)


class UpdateProfile(pydantic.BaseModel):
    name: str


class DeleteUser(pydantic.BaseModel):
    user_id: str


async def profile(*, context):
    return {"profile": context["user"]}


async def update_profile(*, input: UpdateProfile, context):
    return {"updated": input.name, "user_id": context["user"].id}


async def delete_user(*, input: DeleteUser, context):
    return {"deleted": input.user_id}


def endpoints(token: str | None):
    return {
        "get_profile": (authed(token, config).finalize(profile), None),
        "update_profile": (
            authed(token, config).with_validator(UpdateProfile).finalize(update_profile),
            {"name": "New Name"},
        ),
        "delete_user": (
            admin(token, config).with_validator(DeleteUser).finalize(delete_user),
            {"user_id": "1"},
        ),
    }


async def main() -> None:
    for token in ("user-token", "admin-token", None):
        print(f"--- token={token!r}")
        for name, (fn, raw) in endpoints(token).items():
            result = await (fn() if raw is None else fn(input=raw))
            print(f"  {name}: {result.to_dict()}")


if __name__ == "__main__":
    asyncio.run(main())
