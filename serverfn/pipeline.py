"""Pipeline: immutable, branchable builder for server functions."""

from __future__ import annotations

from typing import Any, Optional

from .config import ServerFnConfig
from .errors import PipelineConfigError
from .executor import ServerFn
from .protocol import Handler, Stage
from .validation import Validator, as_validator


class Pipeline:
    """Ordered stages plus an optional validator, not yet bound to a handler.

    Build via the fluent API::

        authed = create_server_fn().with_stage(require_user)

        get_profile = authed.finalize(profile_handler)
        update_profile = (
            authed
            .with_validator(UpdateProfile)
            .finalize(update_handler)
        )

    Every builder method returns a **new** ``Pipeline``; the receiver is never
    modified.  Stages are kept in a tuple, so a base pipeline can seed any
    number of derived pipelines that never see each other's additions.
    ``finalize()`` is the only way out: it returns a compiled ``ServerFn``
    which has no builder methods left.
    """

    __slots__ = ("_stages", "_validator", "_config")

    def __init__(
        self,
        stages: tuple = (),
        validator: Any = None,
        config: Optional[ServerFnConfig] = None,
    ) -> None:
        for stage in stages:
            self._check_callable(stage, "stage")
        self._stages: tuple = tuple(stages)
        self._validator: Optional[Validator] = (
            as_validator(validator) if validator is not None else None
        )
        self._config = config or ServerFnConfig()

    @staticmethod
    def _check_callable(obj: object, role: str) -> None:
        if not callable(obj):
            raise PipelineConfigError(
                f"A {role} must be callable, got {type(obj).__name__}."
            )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def stages(self) -> tuple:
        return self._stages

    @property
    def validator(self) -> Optional[Validator]:
        return self._validator

    @property
    def config(self) -> ServerFnConfig:
        return self._config

    # ------------------------------------------------------------------
    # Fluent builder
    # ------------------------------------------------------------------

    def with_stage(self, stage: Stage) -> "Pipeline":
        """Return a new pipeline with *stage* appended."""
        self._check_callable(stage, "stage")
        return Pipeline(self._stages + (stage,), self._validator, self._config)

    def with_validator(self, validator: Any) -> "Pipeline":
        """Return a new pipeline that validates caller input with *validator*.

        Raises ``PipelineConfigError`` right away if this pipeline already
        has a validator or if *validator* is neither a schema nor a callable.
        """
        if self._validator is not None:
            raise PipelineConfigError(
                "with_validator() can only be called once per pipeline."
            )
        return Pipeline(self._stages, as_validator(validator), self._config)

    def finalize(self, handler: Handler) -> ServerFn:
        """Bind *handler* and return the compiled server function."""
        self._check_callable(handler, "handler")
        return ServerFn(self._stages, self._validator, handler, self._config)


def create_server_fn(config: Optional[ServerFnConfig] = None) -> Pipeline:
    """Start a new, empty pipeline."""
    return Pipeline(config=config)
