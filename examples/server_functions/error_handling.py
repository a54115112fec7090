#!/usr/bin/env python3
"""Soft errors become envelopes; anything else propagates."""

from __future__ import annotations

import asyncio
from typing import Literal

import pydantic

from serverfn import (
    ForbiddenError,
    NotFoundError,
    ServerFnError,
    UnauthorizedError,
    ValidationError,
    create_server_fn,
)


class PaymentError(ServerFnError):
    code = "PAYMENT_ERROR"

    def __init__(self, message: str = "Payment failed") -> None:
        super().__init__(message)


class Demo(pydantic.BaseModel):
    error_type: Literal["validation", "unauthorized", "forbidden", "not_found", "custom", "none"]


class Payment(pydantic.BaseModel):
    amount: float = pydantic.Field(gt=0)
    card_number: str


async def demonstrate(*, input: Demo, context):
    if input.error_type == "validation":
        raise ValidationError("Form is invalid", ["Name required", "Email invalid"])
    if input.error_type == "unauthorized":
        raise UnauthorizedError("Please log in")
    if input.error_type == "forbidden":
        raise ForbiddenError("Access denied")
    if input.error_type == "not_found":
        raise NotFoundError("User not found")
    if input.error_type == "custom":
        raise ServerFnError("Something went wrong", "BUSINESS_ERROR")
    return {"success": True}


async def charge(*, input: Payment, context):
    if input.card_number == "4000000000000002":
        raise PaymentError("Card declined")
    return {"charged": input.amount, "success": True}


async def crash(*, context):
    raise RuntimeError("This is a hard error that will propagate")


demonstrate_fn = create_server_fn().with_validator(Demo).finalize(demonstrate)
charge_fn = create_server_fn().with_validator(Payment).finalize(charge)
crash_fn = create_server_fn().finalize(crash)


async def main() -> None:
    for kind in ("validation", "unauthorized", "forbidden", "not_found", "custom", "none"):
        print(f"{kind}: {(await demonstrate_fn(input={'error_type': kind})).to_dict()}")
    for card in ("4242424242424242", "4000000000000002"):
        result = await charge_fn(input={"amount": 10, "card_number": card})
        print(f"card {card}: {result.to_dict()}")
    try:
        await crash_fn()
    except RuntimeError as exc:
        print(f"hard error propagated: {exc}")


if __name__ == "__main__":
    asyncio.run(main())
