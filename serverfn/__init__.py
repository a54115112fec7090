"""Server function pipelines: stages, one validator, a handler, an envelope.

Public surface::

    from serverfn import (
        create_server_fn,
        Pipeline,
        ServerFn,
        Success,
        Failure,
        ServerFnError,
        ValidationError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        PipelineConfigError,
    )
"""

from .config import ServerFnConfig, configure_logging
from .context import EMPTY_CONTEXT, extend
from .envelope import Envelope, Failure, Success
from .errors import (
    ForbiddenError,
    NotFoundError,
    PipelineConfigError,
    ServerFnError,
    UnauthorizedError,
    ValidationError,
)
from .executor import MISSING, ServerFn
from .pipeline import Pipeline, create_server_fn
from .protocol import Handler, Schema, Stage
from .validation import PredicateValidator, SchemaValidator, Validator, as_validator

__all__ = [
    "create_server_fn",
    "Pipeline",
    "ServerFn",
    "ServerFnConfig",
    "configure_logging",
    "EMPTY_CONTEXT",
    "extend",
    "MISSING",
    "Envelope",
    "Success",
    "Failure",
    "ServerFnError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "PipelineConfigError",
    "Stage",
    "Schema",
    "Handler",
    "Validator",
    "SchemaValidator",
    "PredicateValidator",
    "as_validator",
]
