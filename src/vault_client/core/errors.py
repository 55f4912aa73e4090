"""Errors raised by the client itself.

Only local failures live here. HTTP error statuses and network failures are
the `httpx` exceptions raised by the transport and reach the caller as-is.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import ValidationError


class VaultError(Exception):
    """Base class for errors raised by vault_client."""


class VaultValidationError(VaultError, ValueError):
    """A value did not match its declared shape. Never retryable.

    `location` is the argument category (`path`, `query`, `body`) or
    `response`; `errors` holds one entry per offending field with its
    `loc`, `msg` and `type`.
    """

    def __init__(self, location: str, errors: Sequence[dict[str, Any]], message: str | None = None) -> None:
        self.location = location
        self.errors = [dict(err) for err in errors]
        super().__init__(message or self._format())

    def _format(self) -> str:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or '<root>'}: {err.get('msg', 'invalid')}"
            for err in self.errors
        )
        return f"invalid {self.location}: {details}" if details else f"invalid {self.location}"

    @property
    def fields(self) -> list[str]:
        return [".".join(str(part) for part in err.get("loc", ())) for err in self.errors]

    @classmethod
    def from_pydantic(cls, location: str, exc: ValidationError) -> "VaultValidationError":
        errors = [
            {"loc": tuple(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors(include_url=False)
        ]
        return cls(location, errors)


class CommandValidationError(VaultValidationError):
    """Caller-supplied arguments were rejected before dispatch."""


class ResponseValidationError(VaultValidationError):
    """The decoded response payload did not match the declared response shape."""


class PathTemplateError(CommandValidationError):
    """A `{{placeholder}}` in the path template has no matching path argument."""

    def __init__(self, template: str, missing: Sequence[str]) -> None:
        self.template = template
        self.missing = list(missing)
        errors = [{"loc": (name,), "msg": "missing path argument", "type": "missing"} for name in self.missing]
        super().__init__(
            "path",
            errors,
            f"cannot resolve path template {template!r}: missing {', '.join(self.missing)}",
        )
