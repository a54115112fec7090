"""Server function error types."""

from __future__ import annotations


class PipelineConfigError(Exception):
    """Invalid pipeline wiring, raised while the pipeline is being built.

    Examples:
    - ``with_validator()`` called on a pipeline that already has a validator.
    - A validator that is neither a schema nor a callable.
    - A non-callable stage or handler.
    """


class ServerFnError(Exception):
    """Recoverable error that becomes a structured ``Failure`` envelope.

    Raise it (or a subclass) from a stage or a handler::

        raise ServerFnError("Something went wrong", "BUSINESS_ERROR")
        # -> Failure(code="BUSINESS_ERROR", errors=("Something went wrong",))

    ``errors`` defaults to ``[message]`` when omitted or empty.  Both are
    coerced to ``str``, so ``raise NotFoundError(exc)`` is safe.
    """

    code: str = "SERVER_ERROR"

    def __init__(
        self,
        message: str = "Server error",
        code: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = str(message)
        if code:
            self.code = code
        self.errors: list[str] = (
            [str(e) for e in errors] if errors else [self.message]
        )


class ValidationError(ServerFnError):
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[str] | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code, errors)


class UnauthorizedError(ServerFnError):
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", code: str | None = None) -> None:
        super().__init__(message, code)


class ForbiddenError(ServerFnError):
    code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden", code: str | None = None) -> None:
        super().__init__(message, code)


class NotFoundError(ServerFnError):
    code = "NOT_FOUND"

    def __init__(self, message: str = "Not found", code: str | None = None) -> None:
        super().__init__(message, code)
