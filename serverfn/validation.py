"""Validator tagged union and the dispatcher that runs it.

A pipeline carries at most one validator, in one of two shapes:

``SchemaValidator``
    Wraps a structural schema (a pydantic model, a ``TypeAdapter`` or any
    object with ``parse(raw)``).  Violations come back as an ordered list of
    messages, one per violated constraint.

``PredicateValidator``
    Wraps an arbitrary function ``raw -> value`` (async or plain).  Whatever
    it raises is reduced to one synthetic message.

The shape is decided once, by ``as_validator()``, when the validator is
attached; the dispatcher never inspects the raw object again.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

import pydantic

from .compose import invoke
from .errors import PipelineConfigError, ValidationError
from .protocol import Schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaValidator:
    parse: Callable[[Any], Any]
    source: Any = None


@dataclass(frozen=True)
class PredicateValidator:
    fn: Callable[[Any], Any]


Validator = Union[SchemaValidator, PredicateValidator]


def as_validator(obj: Any) -> Validator:
    """Classify *obj* into a ``Validator``; raise ``PipelineConfigError`` if impossible."""
    if isinstance(obj, (SchemaValidator, PredicateValidator)):
        return obj
    if isinstance(obj, type) and issubclass(obj, pydantic.BaseModel):
        return SchemaValidator(pydantic.TypeAdapter(obj).validate_python, source=obj)
    if isinstance(obj, pydantic.TypeAdapter):
        return SchemaValidator(obj.validate_python, source=obj)
    if isinstance(obj, type) and isinstance(obj, Schema):
        if not isinstance(
            inspect.getattr_static(obj, "parse"), (classmethod, staticmethod)
        ):
            raise PipelineConfigError(
                f"{obj.__name__}.parse is an instance method; pass an instance "
                f"of {obj.__name__}, not the class."
            )
        return SchemaValidator(obj.parse, source=obj)
    if isinstance(obj, Schema) and callable(obj.parse):
        return SchemaValidator(obj.parse, source=obj)
    if callable(obj):
        return PredicateValidator(obj)
    raise PipelineConfigError(
        f"Cannot use {type(obj).__name__} as a validator: expected a pydantic "
        f"model, a TypeAdapter, an object with parse(), or a callable."
    )


def _violation_messages(exc: Exception, validator: Validator) -> list[str]:
    """Ordered messages describing why validation failed."""
    if isinstance(exc, pydantic.ValidationError):
        return [str(err["msg"]) for err in exc.errors()]
    if isinstance(validator, SchemaValidator):
        errors = getattr(exc, "errors", None)
        if isinstance(errors, (list, tuple)) and errors and all(
            isinstance(msg, str) for msg in errors
        ):
            return list(errors)
    return [f"Validation failed: {str(exc) or type(exc).__name__}"]


async def run_validator(validator: Validator, raw: Any) -> Any:
    """Validate *raw* and return the typed value.

    Every failure, whatever its type, is re-raised as ``ValidationError`` so
    the resulting envelope always carries ``VALIDATION_ERROR``.  A predicate's
    own ``ServerFnError`` code is not kept; only its description survives.
    """
    try:
        if isinstance(validator, SchemaValidator):
            logger.debug("Validating input with schema %r", validator.source)
            return validator.parse(raw)
        logger.debug("Validating input with predicate %r", validator.fn)
        return await invoke(validator.fn, raw)
    except Exception as exc:
        raise ValidationError(errors=_violation_messages(exc, validator)) from exc
