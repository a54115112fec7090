"""End-to-end tests: realistic server functions built from shared bases."""

from __future__ import annotations

import asyncio

import pytest

from serverfn import (
    ForbiddenError,
    NotFoundError,
    ServerFnError,
    UnauthorizedError,
    ValidationError,
    create_server_fn,
    extend,
)
from tests.serverfn.conftest import Recorder, echo


class FormData:
    """Minimal multipart-form stand-in."""

    def __init__(self, **fields):
        self._fields = fields

    def get(self, key):
        return self._fields.get(key)


async def parse_form(data):
    if not isinstance(data, FormData):
        raise ValidationError("Expected FormData")
    name = data.get("name")
    if not name:
        raise ValidationError("Name is required")
    return {"name": name}


USERS = {"1": {"id": "1", "role": "user"}, "2": {"id": "2", "role": "admin"}}
POSTS = {"p1": {"id": "p1", "title": "Hello"}}


def auth_stage(user_id):
    async def authenticate(ctx):
        await asyncio.sleep(0)
        user = USERS.get(user_id)
        if user is None:
            raise UnauthorizedError("Login required")
        return extend(ctx, user=user)

    return authenticate


async def require_admin(ctx):
    if ctx["user"]["role"] != "admin":
        raise ForbiddenError("Admin required")
    return extend(ctx, is_admin=True)


@pytest.mark.integration
class TestSchemaRoundTrip:
    def test_valid_input_echoed(self, name_schema):
        fn = create_server_fn().with_validator(name_schema).finalize(echo)
        envelope = asyncio.run(fn(input={"name": "X"}))
        assert envelope.to_dict() == {"ok": True, "data": {"name": "X"}}

    def test_invalid_input_rejected(self, name_schema):
        fn = create_server_fn().with_validator(name_schema).finalize(echo)
        wire = asyncio.run(fn(input={})).to_dict()
        assert wire["ok"] is False
        assert wire["code"] == "VALIDATION_ERROR"
        assert len(wire["errors"]) >= 1


@pytest.mark.integration
class TestPredicateValidation:
    @pytest.mark.parametrize("raw", [{"name": "x"}, "name=x", 42, None])
    def test_non_form_input_rejected(self, raw):
        fn = create_server_fn().with_validator(parse_form).finalize(echo)
        envelope = asyncio.run(fn(input=raw))
        assert envelope.ok is False
        assert envelope.code == "VALIDATION_ERROR"
        assert len(envelope.errors) == 1
        assert "Expected FormData" in envelope.errors[0]

    def test_form_input_accepted(self):
        async def greet(*, input, context):
            return {"greeting": f"Hello {input['name']}!"}

        fn = create_server_fn().with_validator(parse_form).finalize(greet)
        envelope = asyncio.run(fn(input=FormData(name="Ada")))
        assert envelope.data == {"greeting": "Hello Ada!"}


@pytest.mark.integration
class TestSharedBases:
    def test_derived_endpoints_from_auth_base(self):
        authed = create_server_fn().with_stage(auth_stage("1"))

        async def profile(*, context):
            return {"profile": context["user"]}

        async def get_post(*, input, context):
            post = POSTS.get(input)
            if post is None:
                raise NotFoundError("Post not found")
            return post

        get_profile = authed.finalize(profile)
        read_post = authed.with_validator(lambda raw: str(raw)).finalize(get_post)

        assert asyncio.run(get_profile()).data == {"profile": USERS["1"]}
        assert asyncio.run(read_post(input="p1")).data == POSTS["p1"]
        assert asyncio.run(read_post(input="zz")).to_dict() == {
            "ok": False,
            "code": "NOT_FOUND",
            "errors": ["Post not found"],
        }

    def test_admin_chain(self):
        async def delete_user(*, input, context):
            return {"deleted": input, "by": context["user"]["id"]}

        def endpoint(user_id):
            return (
                create_server_fn()
                .with_stage(auth_stage(user_id))
                .with_stage(require_admin)
                .with_validator(str)
                .finalize(delete_user)
            )

        assert asyncio.run(endpoint("2")(input="7")).data == {"deleted": "7", "by": "2"}
        assert asyncio.run(endpoint("1")(input="7")).code == "FORBIDDEN"
        assert asyncio.run(endpoint("9")(input="7")).code == "UNAUTHORIZED"

    def test_branches_never_cross_contaminate(self):
        base_rec, left_rec, right_rec = Recorder(), Recorder(), Recorder()

        async def left(ctx):
            return extend(ctx, side="left")

        async def right(ctx):
            return extend(ctx, side="right")

        async def show(*, context):
            return dict(context)

        base = create_server_fn().with_stage(base_rec)
        b1 = base.with_stage(left).with_stage(left_rec)
        b2 = base.with_stage(right).with_stage(right_rec)

        assert asyncio.run(base.finalize(show)()).data == {}
        assert asyncio.run(b1.finalize(show)()).data == {"side": "left"}
        assert asyncio.run(b2.finalize(show)()).data == {"side": "right"}
        assert len(base_rec.call_log) == 3
        assert len(left_rec.call_log) == 1
        assert len(right_rec.call_log) == 1


@pytest.mark.integration
class TestConcurrency:
    def test_concurrent_calls_do_not_share_state(self):
        async def tag(ctx):
            await asyncio.sleep(0.01)
            return extend(ctx, seen=ctx.get("seen", 0) + 1)

        async def handler(*, input, context):
            await asyncio.sleep(0)
            return (input, context["seen"])

        fn = create_server_fn().with_stage(tag).with_validator(int).finalize(handler)

        async def main():
            return await asyncio.gather(*(fn(input=str(i)) for i in range(20)))

        results = asyncio.run(main())
        assert [r.data for r in results] == [(i, 1) for i in range(20)]

    def test_repeated_calls_are_structurally_identical(self, name_schema):
        fn = create_server_fn().with_validator(name_schema).finalize(echo)
        first = asyncio.run(fn(input={"name": "X"}))
        second = asyncio.run(fn(input={"name": "X"}))
        assert first == second
        bad_first = asyncio.run(fn(input={}))
        bad_second = asyncio.run(fn(input={}))
        assert bad_first == bad_second

    def test_caller_side_deadline(self):
        async def slow(*, context):
            await asyncio.sleep(1)

        fn = create_server_fn().finalize(slow)

        async def main():
            return await asyncio.wait_for(fn(), timeout=0.01)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(main())


@pytest.mark.integration
class TestErrorHandling:
    def test_custom_error_subclass(self):
        class PaymentError(ServerFnError):
            code = "PAYMENT_ERROR"

            def __init__(self, message: str = "Payment failed"):
                super().__init__(message)

        async def charge(*, input, context):
            if input["card"] == "4000000000000002":
                raise PaymentError("Card declined")
            return {"charged": input["amount"]}

        def check(raw):
            if raw.get("amount", 0) <= 0:
                raise ValueError("amount must be positive")
            return raw

        fn = create_server_fn().with_validator(check).finalize(charge)
        declined = asyncio.run(fn(input={"amount": 5, "card": "4000000000000002"}))
        assert declined.to_dict() == {
            "ok": False,
            "code": "PAYMENT_ERROR",
            "errors": ["Card declined"],
        }
        ok = asyncio.run(fn(input={"amount": 5, "card": "4242"}))
        assert ok.data == {"charged": 5}
        negative = asyncio.run(fn(input={"amount": -1, "card": "4242"}))
        assert negative.errors == ("Validation failed: amount must be positive",)

    def test_hard_error_reaches_caller(self):
        async def broken(*, context):
            return context["missing"]

        with pytest.raises(KeyError):
            asyncio.run(create_server_fn().finalize(broken)())
