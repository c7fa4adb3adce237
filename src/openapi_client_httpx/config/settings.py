"""Client construction settings read from the environment."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from openapi_client_httpx.config.resolver import SettingResolver
from openapi_client_httpx.errors.exceptions import ConfigurationError


def parse_server_selector(raw: str) -> int | str:
    """``"2"`` selects by index, anything else by description."""
    raw = raw.strip()
    return int(raw) if raw.isdigit() else raw


def parse_server_variables(raw: str) -> dict[str, int | str]:
    """Parse ``"foo2=bar2a,foo3=1"``; digit values become enum indices."""
    variables: dict[str, int | str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ConfigurationError(f"Invalid server variable assignment: '{item}' (expected name=value)")
        value = value.strip()
        variables[name.strip()] = int(value) if value.isdigit() else value
    return variables


@dataclass
class ClientSettings:
    """Settings for building an OpenAPIClient.

    Environment variables (with the default ``OPENAPI_`` prefix):

    | Variable                   | Setting                                   |
    |----------------------------|-------------------------------------------|
    | ``OPENAPI_DEFINITION``     | definition file path or URL (required)    |
    | ``OPENAPI_SERVER``         | server index or description               |
    | ``OPENAPI_SERVER_VARIABLES`` | ``name=value`` pairs, comma separated  |
    | ``OPENAPI_TOKEN``          | bearer token                              |
    | ``OPENAPI_TOKEN_FILE``     | file containing the bearer token          |
    | ``OPENAPI_TIMEOUT``        | request timeout in seconds                |
    """

    definition: str
    server: int | str = 0
    server_variables: dict[str, int | str] = field(default_factory=dict)
    token: str | None = None
    timeout: float | None = None

    @classmethod
    def from_env(
        cls,
        prefix: str = "OPENAPI_",
        *,
        resolver: SettingResolver | None = None,
        dotenv_path: str | Path | None = None,
        **overrides: Any,
    ) -> "ClientSettings":
        """Resolve settings from explicit overrides, the environment and .env.

        Raises:
            SettingNotFoundError: If no definition is configured
            ConfigurationError: On malformed values
        """
        resolver = resolver or SettingResolver(dotenv_path=dotenv_path)

        definition = resolver.resolve(
            value=overrides.get("definition"), env_var_name=f"{prefix}DEFINITION", required=True
        )

        server: int | str = 0
        if "server" in overrides:
            server = overrides["server"]
        elif raw_server := resolver.resolve(env_var_name=f"{prefix}SERVER"):
            server = parse_server_selector(raw_server)

        server_variables: dict[str, int | str] = {}
        if "server_variables" in overrides:
            server_variables = dict(overrides["server_variables"])
        elif raw_variables := resolver.resolve(env_var_name=f"{prefix}SERVER_VARIABLES"):
            server_variables = parse_server_variables(raw_variables)

        token = resolver.resolve(value=overrides.get("token"), env_var_name=f"{prefix}TOKEN", secret=True)
        if token is None:
            token = resolver.resolve_from_file(env_var_name=f"{prefix}TOKEN_FILE")

        timeout = None
        raw_timeout = resolver.resolve(value=overrides.get("timeout"), env_var_name=f"{prefix}TIMEOUT")
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(f"Invalid timeout: {raw_timeout!r}") from e

        return cls(
            definition=definition,
            server=server,
            server_variables=server_variables,
            token=token,
            timeout=timeout,
        )

    def default_headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def http_client_options(self) -> dict[str, Any]:
        if self.timeout is not None:
            return {"timeout": self.timeout}
        return {}
