#!/usr/bin/env python3
"""Schema validators (pydantic) next to predicate validators (plain functions)."""

from __future__ import annotations

import asyncio
import uuid

import pydantic

from serverfn import ValidationError, create_server_fn


class CreateUser(pydantic.BaseModel):
    name: str = pydantic.Field(min_length=2)
    email: str = pydantic.Field(pattern=r"^[^@\s]+@[^@\s]+$")
    age: int = pydantic.Field(ge=18)


class FormData(dict):
    """Stand-in for a submitted form."""


async def create_user(*, input: CreateUser, context):
    return {"user": input.model_dump(), "id": uuid.uuid4().hex}


async def parse_form(data):
    if not isinstance(data, FormData):
        raise ValidationError("Expected FormData")
    name, email = data.get("name"), data.get("email")
    if not isinstance(name, str) or not name:
        raise ValidationError("Name required")
    if not isinstance(email, str) or "@" not in email:
        raise ValidationError("Valid email required")
    return {"name": name, "email": email}


async def process_form(*, input, context):
    return {"processed": True, "data": input}


create_user_fn = create_server_fn().with_validator(CreateUser).finalize(create_user)
process_form_fn = create_server_fn().with_validator(parse_form).finalize(process_form)


async def main() -> None:
    calls = [
        (create_user_fn, {"name": "Ada", "email": "ada@example.com", "age": 36}),
        (create_user_fn, {"name": "A", "email": "nope", "age": 12}),
        (process_form_fn, FormData(name="Ada", email="ada@example.com")),
        (process_form_fn, {"name": "Ada"}),
    ]
    for fn, raw in calls:
        print(f"{fn!r} <- {raw!r}")
        print(f"  {(await fn(input=raw)).to_dict()}")


if __name__ == "__main__":
    asyncio.run(main())
