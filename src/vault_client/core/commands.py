"""Command generator.

Turns a declarative `CommandDefinition` (method, `{{placeholder}}` path
template, optional path/query/body/response models) into an awaitable
command bound to a client:

1. split the caller's arguments into path/query/body buckets,
2. validate each bucket in strict mode (defaults applied first, no coercion),
3. resolve the path template,
4. compose URL, headers and body, merging client and per-call overrides,
5. dispatch through the client's transport,
6. validate the decoded response, also strictly, when a response shape is declared.

Steps 1-4 never touch the network; any failure there raises before dispatch.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import quote

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from vault_client.core.config import RequestOptions
from vault_client.core.errors import (
    CommandValidationError,
    PathTemplateError,
    ResponseValidationError,
)

if TYPE_CHECKING:
    from vault_client.client import Client

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class RequestSchema:
    """Shapes for each argument category and for the response.

    `path`, `query` and `body` are pydantic model classes; `response` is any
    type a `TypeAdapter` accepts (model, `dict[str, Any]`, tagged union).
    """

    path: type[BaseModel] | None = None
    query: type[BaseModel] | None = None
    body: type[BaseModel] | None = None
    response: Any = None


@dataclass(frozen=True)
class CommandDefinition:
    method: str
    path: str
    schema: RequestSchema = field(default_factory=RequestSchema)
    strict: bool = False


@dataclass
class RequestInit:
    """A fully resolved outgoing request, as handed to the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    json: Any = None
    timeout: float | None = None


@dataclass
class SplitArguments:
    path: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    unclaimed: dict[str, Any] = field(default_factory=dict)


def _field_keys(model: type[BaseModel]) -> set[str]:
    keys: set[str] = set()
    for name, info in model.model_fields.items():
        keys.add(name)
        if isinstance(info.alias, str):
            keys.add(info.alias)
        if isinstance(info.validation_alias, str):
            keys.add(info.validation_alias)
    return keys


def _accepts_extra(model: type[BaseModel]) -> bool:
    return model.model_config.get("extra") == "allow"


def split_arguments(schema: RequestSchema, args: Mapping[str, Any], *, strict: bool = False) -> SplitArguments:
    """Assign each argument to the first category whose model declares it.

    A body model that allows extra keys also takes everything left over.
    With `strict`, leftovers are an error; otherwise they come back in
    `unclaimed` for verbatim pass-through.
    """

    remaining = dict(args)
    split = SplitArguments()
    for location in ("path", "query", "body"):
        model = getattr(schema, location)
        if model is None:
            continue
        if location == "body" and _accepts_extra(model):
            claimed, remaining = remaining, {}
        else:
            keys = _field_keys(model)
            claimed = {key: remaining.pop(key) for key in list(remaining) if key in keys}
        setattr(split, location, claimed)

    if remaining and strict:
        raise CommandValidationError(
            "arguments",
            [{"loc": (key,), "msg": "unexpected argument", "type": "extra_forbidden"} for key in sorted(remaining)],
        )
    split.unclaimed = remaining
    return split


def validate_arguments(model: type[BaseModel] | None, values: Mapping[str, Any], location: str) -> dict[str, Any]:
    """Validate one argument bucket and return its wire form (`None` fields dropped)."""

    if model is None:
        return dict(values)
    try:
        validated = model.model_validate(dict(values), strict=True)
    except ValidationError as exc:
        logger.debug("Rejected {} arguments for {}: {}", location, model.__name__, exc.error_count())
        raise CommandValidationError.from_pydantic(location, exc) from exc
    return validated.model_dump(mode="json", by_alias=True, exclude_none=True)


def render_path(template: str, values: Mapping[str, Any]) -> str:
    """Substitute every `{{name}}` in `template` with its URL-encoded value.

    A placeholder whose value is `None` or renders empty once surrounding
    slashes are stripped counts as missing.
    """

    rendered: dict[str, str] = {}
    missing: list[str] = []
    for name in dict.fromkeys(_PLACEHOLDER.findall(template)):
        value = values.get(name)
        segment = "" if value is None else str(value).strip("/")
        # An empty segment would silently retarget the request at the parent path.
        if not segment:
            missing.append(name)
        else:
            rendered[name] = quote(segment, safe="/")
    if missing:
        raise PathTemplateError(template, missing)

    resolved = _PLACEHOLDER.sub(lambda match: rendered[match.group(1)], template)
    if "{{" in resolved or "}}" in resolved:
        raise PathTemplateError(template, [resolved])
    return resolved


def build_url(endpoint: str, path_prefix: str, api_version: str, path: str) -> str:
    segments = [endpoint.rstrip("/")]
    for part in (path_prefix, api_version):
        part = (part or "").strip("/")
        if part:
            segments.append(part)
    return "/".join(segments) + "/" + path.lstrip("/")


def merge_overrides(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `overrides` into a copy of `base`: mappings recursively, other values replaced."""

    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_overrides(dict(current), value)
        else:
            merged[key] = value
    return merged


def _as_overrides(options: RequestOptions | Mapping[str, Any] | None) -> dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, RequestOptions):
        return options.as_overrides()
    try:
        return RequestOptions.model_validate(dict(options)).as_overrides()
    except ValidationError as exc:
        raise CommandValidationError.from_pydantic("options", exc) from exc


def generate_command_request_init(
    definition: CommandDefinition,
    client: Client,
    args: Mapping[str, Any] | None = None,
    options: RequestOptions | Mapping[str, Any] | None = None,
) -> RequestInit:
    """Validate `args` and build the request for `definition`, without sending it."""

    schema = definition.schema
    method = definition.method.upper()
    split = split_arguments(schema, args or {}, strict=definition.strict)

    path_values = validate_arguments(schema.path, split.path, "path")
    query = validate_arguments(schema.query, split.query, "query")
    body = validate_arguments(schema.body, split.body, "body")

    # Unclaimed arguments fill placeholders only when no path model is declared;
    # those are not forwarded.
    placeholders = set(_PLACEHOLDER.findall(definition.path)) if schema.path is None else set()
    unclaimed = {key: value for key, value in split.unclaimed.items() if key not in placeholders}
    if unclaimed:
        if method in _BODY_METHODS:
            body = {**unclaimed, **body}
        else:
            query = {**unclaimed, **query}

    template_values = path_values if schema.path is not None else {**split.unclaimed, **path_values}
    resolved = render_path(definition.path, template_values)

    headers: dict[str, str] = {}
    if client.token:
        headers["X-Vault-Token"] = client.token
    if client.namespace:
        headers["X-Vault-Namespace"] = client.namespace

    init: dict[str, Any] = {
        "method": method,
        "url": build_url(client.endpoint, client.path_prefix, client.api_version, resolved),
        "headers": headers,
        "params": query,
        "json": body if (schema.body is not None or body) else None,
        "timeout": None,
    }
    for overrides in (client.request, options):
        init = merge_overrides(init, _as_overrides(overrides))

    if init["json"] is not None and not any(key.lower() == "content-type" for key in init["headers"]):
        init["headers"]["Content-Type"] = "application/json"
    init["method"] = str(init["method"]).upper()
    return RequestInit(**init)


_ADAPTERS: dict[int, tuple[Any, TypeAdapter[Any]]] = {}


def _response_adapter(schema: Any) -> TypeAdapter[Any]:
    cached = _ADAPTERS.get(id(schema))
    if cached is None or cached[0] is not schema:
        cached = (schema, TypeAdapter(schema))
        _ADAPTERS[id(schema)] = cached
    return cached[1]


def validate_response(schema: Any, payload: Any) -> Any:
    if schema is None:
        return payload
    try:
        return _response_adapter(schema).validate_python(payload, strict=True)
    except ValidationError as exc:
        logger.debug("Response did not match {}: {}", schema, exc.error_count())
        raise ResponseValidationError.from_pydantic("response", exc) from exc


async def request(client: Client, init: RequestInit, response_schema: Any = None) -> Any:
    """Send `init` through the client's transport and validate the decoded payload."""

    logger.debug("Vault request {} {}", init.method, init.url)
    payload = await client.transport.send(init)
    return validate_response(response_schema, payload)


class Command:
    """A `CommandDefinition` bound to a client.

    Call it with a mapping of arguments, keyword arguments, or both
    (keywords win); the second positional argument carries per-call request
    overrides.
    """

    def __init__(self, definition: CommandDefinition, client: Client) -> None:
        self.definition = definition
        self.client = client

    async def __call__(
        self,
        args: Mapping[str, Any] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        arguments = {**(args or {}), **kwargs}
        init = generate_command_request_init(self.definition, self.client, arguments, options)
        return await request(self.client, init, self.definition.schema.response)

    def __repr__(self) -> str:
        return f"<Command {self.definition.method.upper()} {self.definition.path}>"


def generate_command(definition: CommandDefinition, client: Client) -> Command:
    return Command(definition, client)

