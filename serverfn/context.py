"""Read-only context threaded from stage to stage."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# Every invocation starts from this.  Immutable, so sharing it is safe.
EMPTY_CONTEXT: Mapping[str, Any] = MappingProxyType({})


def extend(ctx: Mapping[str, Any], **values: Any) -> MappingProxyType:
    """Return a new read-only context holding *ctx* plus *values*.

    Stages never mutate the incoming context::

        async def with_user(ctx):
            return extend(ctx, user=await load_user())
    """
    return MappingProxyType({**ctx, **values})
