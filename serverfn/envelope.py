"""Result envelope returned by every compiled server function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """Handler completed; ``data`` is its return value, untouched."""

    data: Any
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "data": self.data}


@dataclass(frozen=True)
class Failure:
    """Recoverable failure with a machine-readable code.

    ``errors`` is an ordered, ready-to-display list of messages.  Stored as a
    tuple; ``to_dict()`` renders it as a list.
    """

    code: str
    errors: tuple[str, ...]
    ok: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "code": self.code, "errors": list(self.errors)}


Envelope = Union[Success, Failure]
