"""Error classifier: recoverable ``ServerFnError`` vs everything else."""

from __future__ import annotations

from .envelope import Failure
from .errors import ServerFnError


def is_recoverable(exc: BaseException) -> bool:
    """True when *exc* should become a ``Failure`` instead of propagating."""
    return isinstance(exc, ServerFnError)


def to_failure(exc: ServerFnError) -> Failure:
    """Convert a domain error 1:1 into a ``Failure`` envelope."""
    return Failure(code=exc.code, errors=tuple(exc.errors))
