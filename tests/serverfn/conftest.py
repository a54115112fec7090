"""Shared fixtures and reusable dummy stages for serverfn tests.

Every stage here is a generic dummy that only uses the context helpers.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any

import pydantic
import pytest
from typing_extensions import TypedDict

from serverfn import ServerFnError, extend

# ---------------------------------------------------------------------------
# Reusable dummy stages
# ---------------------------------------------------------------------------


class SetA:
    """Writes ctx['a'] = 1."""

    async def __call__(self, ctx):
        return extend(ctx, a=1)


class SetB:
    """Reads 'a', writes ctx['b'] = ctx['a'] + 1."""

    async def __call__(self, ctx):
        return extend(ctx, b=ctx["a"] + 1)


class SetC:
    """Reads 'b', writes ctx['c'] = ctx['b'] * 2."""

    async def __call__(self, ctx):
        return extend(ctx, c=ctx["b"] * 2)


class SyncTag:
    """Plain (non-async) stage that appends *tag* to ctx['tags']."""

    def __init__(self, tag: str):
        self.tag = tag

    def __call__(self, ctx):
        return extend(ctx, tags=(*ctx.get("tags", ()), self.tag))


class Boom:
    """Always raises RuntimeError."""

    async def __call__(self, ctx):
        raise RuntimeError("boom")


class Deny:
    """Raises the given ServerFnError."""

    def __init__(self, error: ServerFnError):
        self.error = error

    async def __call__(self, ctx):
        raise self.error


class Recorder:
    """Records every ctx it receives via call_log (thread-safe)."""

    def __init__(self):
        self.call_log: list[Any] = []
        self._lock = threading.Lock()

    async def __call__(self, ctx):
        await asyncio.sleep(0)  # yield to event loop
        with self._lock:
            self.call_log.append(ctx)
        return ctx


class NameInput(TypedDict):
    name: str


class Person(pydantic.BaseModel):
    name: str
    age: int


async def echo(*, input, context):
    return input


async def context_only(*, context):
    return dict(context)


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def name_schema():
    """Schema requiring {name: str}; parses to a plain dict."""
    return pydantic.TypeAdapter(NameInput)
