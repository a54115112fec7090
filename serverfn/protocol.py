"""Structural protocols for the pieces a pipeline is assembled from."""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, Union, runtime_checkable


class Stage(Protocol):
    """Context-to-context transformation.

    Any callable works, async or plain.  The return value becomes the context
    of the next stage (and, after the last stage, the handler's context).
    """

    def __call__(self, ctx: Any) -> Union[Any, Awaitable[Any]]: ...


@runtime_checkable
class Schema(Protocol):
    """Structural schema: ``parse(raw)`` returns the typed value or raises.

    ``@runtime_checkable`` lets ``with_validator()`` recognise third-party
    schema objects with ``isinstance(obj, Schema)`` at attach time.
    """

    def parse(self, raw: Any) -> Any: ...


class Handler(Protocol):
    """Terminal handler, called with ``context=`` and optionally ``input=``."""

    def __call__(self, **kwargs: Any) -> Union[Any, Awaitable[Any]]: ...
