"""Secrets engine schema bundles.

`Client.read` resolves its shapes per call from the engine name the caller
passes. Unknown or missing names fall back to `ANY_ENGINE_SCHEMA`, which
accepts any keyed payload.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from vault_client.core.commands import RequestSchema
from vault_client.core.domain.models import (
    Kv2ReadQuery,
    Kv2ReadResponse,
    KvReadResponse,
    PathArgs,
)


class EngineName(str, Enum):
    KV = "kv"
    KV2 = "kv2"

    @classmethod
    def parse(cls, value: "EngineName | str | None") -> "EngineName | None":
        """Return the matching member, or `None` for unknown/missing names."""

        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class EngineAction(str, Enum):
    READ = "read"


ANY_ENGINE_SCHEMA = RequestSchema(path=PathArgs, response=dict[str, Any])

ENGINES: dict[EngineName, dict[EngineAction, RequestSchema]] = {
    EngineName.KV: {
        EngineAction.READ: RequestSchema(path=PathArgs, response=KvReadResponse),
    },
    EngineName.KV2: {
        EngineAction.READ: RequestSchema(path=PathArgs, query=Kv2ReadQuery, response=Kv2ReadResponse),
    },
}


def resolve_engine_schema(
    engine: EngineName | str | None,
    action: EngineAction | str = EngineAction.READ,
) -> RequestSchema:
    name = EngineName.parse(engine)
    if name is None:
        return ANY_ENGINE_SCHEMA
    return ENGINES.get(name, {}).get(EngineAction(action), ANY_ENGINE_SCHEMA)
