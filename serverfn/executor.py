"""ServerFn: the compiled callable produced by ``Pipeline.finalize()``."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from .classify import is_recoverable, to_failure
from .compose import compose_context, invoke
from .config import ServerFnConfig
from .envelope import Envelope, Failure, Success
from .errors import ValidationError
from .validation import Validator, run_validator

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "the caller passed no input at all"."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _accepts_input(handler: Callable[..., Any]) -> bool:
    """Whether *handler* can be called with an ``input=`` keyword."""
    try:
        params = inspect.signature(handler).parameters.values()
    except (TypeError, ValueError):
        return True
    return any(
        p.name == "input" or p.kind is inspect.Parameter.VAR_KEYWORD for p in params
    )


class ServerFn:
    """Compiled pipeline: stages -> validator -> handler -> envelope.

    Call it with ``await fn()`` or ``await fn(input=raw)``.  It resolves to a
    ``Success`` or ``Failure`` for every ``ServerFnError`` and every
    validation problem; any other exception propagates unchanged.

    The stage tuple, validator and handler are read-only after construction.
    All per-call state (context, validated value) lives in the coroutine, so
    concurrent calls need no coordination.
    """

    __slots__ = ("_stages", "_validator", "_handler", "_config", "_pass_input")

    def __init__(
        self,
        stages: tuple,
        validator: Optional[Validator],
        handler: Callable[..., Any],
        config: Optional[ServerFnConfig] = None,
    ) -> None:
        self._stages = tuple(stages)
        self._validator = validator
        self._handler = handler
        self._config = config or ServerFnConfig()
        self._pass_input = _accepts_input(handler)

    @property
    def stages(self) -> tuple:
        return self._stages

    @property
    def validator(self) -> Optional[Validator]:
        return self._validator

    @property
    def handler(self) -> Callable[..., Any]:
        return self._handler

    def __repr__(self) -> str:
        name = getattr(self._handler, "__qualname__", type(self._handler).__name__)
        return f"ServerFn({name}, stages={len(self._stages)})"

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _failed(self, failure: Failure) -> Failure:
        if self._config.log_failures and logger.isEnabledFor(logging.INFO):
            logger.info(
                "%r failed with %s: %s", self, failure.code, "; ".join(failure.errors)
            )
        return failure

    async def __call__(self, *, input: Any = MISSING) -> Envelope:
        try:
            ctx = await compose_context(self._stages)

            value = input
            if self._validator is not None:
                if input is MISSING:
                    logger.debug("%r called without input; skipping validation", self)
                else:
                    try:
                        value = await run_validator(self._validator, input)
                    except ValidationError as exc:
                        return self._failed(to_failure(exc))
                    if value is None:
                        value = MISSING

            if value is not MISSING and self._pass_input:
                logger.debug("Invoking handler of %r with input and context", self)
                data = await invoke(self._handler, input=value, context=ctx)
            else:
                logger.debug("Invoking handler of %r with context only", self)
                data = await invoke(self._handler, context=ctx)
        except Exception as exc:
            if not is_recoverable(exc):
                logger.warning(
                    "%r raised unclassified %s; propagating", self, type(exc).__name__
                )
                raise
            return self._failed(to_failure(exc))
        return Success(data)
