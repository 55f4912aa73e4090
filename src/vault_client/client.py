"""Client facade.

Holds the connection configuration and exposes the pre-bound commands.
`token` and `namespace` are plain attributes: set them between calls (for
instance after `init` returns a root token) and the next command picks
them up. No synchronization is provided for concurrent reassignment.
"""

from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from vault_client.adapters.http_client import HttpxTransport
from vault_client.core import endpoints
from vault_client.core.commands import (
    Command,
    CommandDefinition,
    generate_command,
    generate_command_request_init,
    request,
)
from vault_client.core.config import (
    DEFAULT_API_VERSION,
    DEFAULT_ENDPOINT,
    DEFAULT_PATH_PREFIX,
    ClientOptions,
    RequestOptions,
    VaultSettings,
)
from vault_client.core.engines import EngineName, resolve_engine_schema
from vault_client.core.interfaces.transport import Transport


class Client:
    """Typed Vault HTTP API client.

    Options come from the `options` mapping (or a `ClientOptions`), keyword
    arguments, the environment and finally the hardcoded defaults, in that
    order.
    """

    endpoint: str
    api_version: str
    path_prefix: str
    token: str | None
    namespace: str | None
    request: RequestOptions | None

    def __init__(
        self,
        options: ClientOptions | Mapping[str, Any] | None = None,
        /,
        *,
        transport: Transport | None = None,
        settings: VaultSettings | None = None,
        commands: Mapping[str, CommandDefinition] | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(options, ClientOptions):
            options = options.model_dump(exclude_none=True)
        opts = ClientOptions.model_validate({**(options or {}), **kwargs})

        self.settings = settings or VaultSettings()
        self.endpoint = opts.endpoint or self.settings.addr or DEFAULT_ENDPOINT
        self.api_version = opts.api_version or DEFAULT_API_VERSION
        self.path_prefix = opts.path_prefix or DEFAULT_PATH_PREFIX
        self.namespace = opts.namespace or self.settings.namespace
        self.token = opts.token or self.settings.token
        self.request = opts.request

        self._transport = transport
        self._owns_transport = transport is None
        self._commands: dict[str, Command] = {}

        self.status = generate_command(endpoints.STATUS, self)
        self.initialized = generate_command(endpoints.INITIALIZED, self)
        self.init = generate_command(endpoints.INIT, self)
        self.unseal = generate_command(endpoints.UNSEAL, self)
        self.seal = generate_command(endpoints.SEAL, self)
        self.write = generate_command(endpoints.WRITE, self)
        self.delete = generate_command(endpoints.DELETE, self)
        self.list = generate_command(endpoints.LIST, self)
        self.mount = generate_command(endpoints.MOUNT, self)
        self.unmount = generate_command(endpoints.UNMOUNT, self)
        self.mounts = generate_command(endpoints.MOUNTS, self)

        if commands:
            self.assign_commands(commands)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpxTransport(settings=self.settings)
        return self._transport

    def assign_commands(self, commands: Mapping[str, CommandDefinition]) -> None:
        """Bind additional commands to this instance, reachable as attributes."""

        for name, definition in commands.items():
            if not name.isidentifier() or name.startswith("_"):
                raise ValueError(f"invalid command name: {name!r}")
            if name in self.__dict__ or hasattr(type(self), name):
                raise ValueError(f"command {name!r} would shadow an existing attribute")
            self._commands[name] = generate_command(definition, self)
            logger.debug("Assigned command {} -> {} {}", name, definition.method, definition.path)

    @property
    def commands(self) -> dict[str, Command]:
        return dict(self._commands)

    def __getattr__(self, name: str) -> Command:
        commands = self.__dict__.get("_commands", {})
        if name in commands:
            return commands[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    async def read(
        self,
        args: Mapping[str, Any] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
        /,
        *,
        engine: EngineName | str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Read `path`, validating with the schema of `engine` when it is known.

        `engine` may also be given inside `args`.
        """

        arguments = {**(args or {}), **kwargs}
        engine = arguments.pop("engine", None) if engine is None else engine
        arguments.pop("engine", None)

        schema = resolve_engine_schema(engine)
        definition = CommandDefinition(method="GET", path="/{{path}}", schema=schema)
        init = generate_command_request_init(definition, self, arguments, options)
        return await request(self, init, schema.response)

    async def aclose(self) -> None:
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()
            self._transport = None

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Client endpoint={self.endpoint!r} api_version={self.api_version!r}>"
