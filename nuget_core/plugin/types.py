"""Data exchanged with the hosting release framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class Hook(str, Enum):
    """Release lifecycle hooks a plugin can subscribe to."""

    PRE_INIT = "pre-init"
    POST_INIT = "post-init"
    PRE_PLAN = "pre-plan"
    POST_PLAN = "post-plan"
    PRE_VERSION = "pre-version"
    POST_VERSION = "post-version"
    PRE_NOTES = "pre-notes"
    POST_NOTES = "post-notes"
    PRE_APPROVE = "pre-approve"
    POST_APPROVE = "post-approve"
    PRE_PUBLISH = "pre-publish"
    POST_PUBLISH = "post-publish"
    ON_SUCCESS = "on-success"
    ON_ERROR = "on-error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReleaseContext:
    version: str
    previous_version: str = ""
    tag_name: str = ""
    release_notes: str = ""
    repository_url: str = ""


@dataclass(frozen=True)
class ExecuteRequest:
    """One hook invocation.

    ``env`` defaults to the process environment. ``deadline`` is an optional
    ``time.monotonic()`` instant after which no further push is started.
    """

    hook: Hook
    config: Mapping[str, Any]
    context: ReleaseContext
    dry_run: bool = False
    env: Mapping[str, str] | None = None
    deadline: float | None = None


@dataclass
class ExecuteResponse:
    success: bool
    message: str = ""
    error: str = ""
    outputs: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidateResponse:
    valid: bool
    errors: tuple[ValidationError, ...] = ()


class ValidationBuilder:
    """Collect field-scoped validation errors without stopping at the first."""

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []

    def add_error(self, field_name: str, message: str) -> "ValidationBuilder":
        self._errors.append(ValidationError(field=field_name, message=message))
        return self

    def build(self) -> ValidateResponse:
        return ValidateResponse(valid=not self._errors, errors=tuple(self._errors))


@dataclass(frozen=True)
class PluginInfo:
    name: str
    version: str
    description: str
    author: str
    hooks: tuple[Hook, ...]
    config_schema: str
