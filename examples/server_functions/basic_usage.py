#!/usr/bin/env python3
"""Basic usage: a bare handler, chained stages, and the result envelope."""

from __future__ import annotations

import asyncio
import logging
import time

from serverfn import ServerFnConfig, configure_logging, create_server_fn, extend

config = ServerFnConfig.from_env()
logging.basicConfig(level=logging.INFO)
configure_logging(config)


async def hello(*, context):
    return {"message": "Hello World!"}


async def add_request_id(ctx):
    return extend(ctx, request_id="req-42")


async def add_timestamp(ctx):
    return extend(ctx, timestamp=time.time())


async def describe(*, context):
    return {"request_id": context["request_id"], "has_timestamp": "timestamp" in context}


hello_fn = create_server_fn(config).finalize(hello)
chained_fn = (
    create_server_fn(config)
    .with_stage(add_request_id)
    .with_stage(add_timestamp)
    .finalize(describe)
)


async def main() -> None:
    for fn in (hello_fn, chained_fn):
        result = await fn()
        if result.ok:
            print(f"{fn!r}: data={result.data}")
        else:
            print(f"{fn!r}: {result.code} {list(result.errors)}")


if __name__ == "__main__":
    asyncio.run(main())
