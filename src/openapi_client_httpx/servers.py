"""Base URL resolution from the document's ``servers`` list.

Resolution order:
1. The operation's own first server (used verbatim)
2. The default server selected by index, description or explicit Server
3. None, when nothing matches

Template variables (``http://{env}.example.com``) are resolved from the
override table, validated against the variable's ``enum``, and otherwise fall
back to the declared ``default``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from openapi_client_httpx.errors.exceptions import (
    ConfigurationError,
    InvalidServerVariableError,
    ServerVariableIndexError,
)
from openapi_client_httpx.serialization import substitute_path, template_names
from openapi_client_httpx.types import Operation, Server

logger = logging.getLogger(__name__)

ServerSelector = int | str | Server | Mapping[str, Any]
VariableOverrides = Mapping[str, int | str]


def select_server(document: Mapping[str, Any], selector: ServerSelector | None) -> Server | None:
    """Pick the target server for ``selector``.

    Args:
        document: The dereferenced API document
        selector: Zero-based index into ``servers``, a server description,
            or a Server (mapping with ``url``) passed through directly

    Returns:
        The selected Server, or None if the selector matches nothing
    """
    if isinstance(selector, Server):
        return selector
    if isinstance(selector, Mapping):
        return Server.from_dict(selector) if selector.get("url") else None

    servers = document.get("servers") or []
    if isinstance(selector, bool):
        return None
    if isinstance(selector, int):
        if 0 <= selector < len(servers):
            return Server.from_dict(servers[selector])
        return None
    if isinstance(selector, str):
        for server in servers:
            if server.get("description") == selector:
                return Server.from_dict(server)
    return None


def resolve_server_url(server: Server, overrides: VariableOverrides | None = None) -> str:
    """Substitute the server's template variables.

    Raises:
        ServerVariableIndexError: A numeric override is outside the enum
        InvalidServerVariableError: A string override is not in the enum
        ConfigurationError: A template variable is neither declared nor overridden
    """
    names = template_names(server.url)
    if not names:
        return server.url

    overrides = overrides or {}
    resolved: dict[str, str] = {}
    for name in names:
        variable = server.variables.get(name)
        value = overrides.get(name)

        if variable is None:
            if value is None:
                raise ConfigurationError(f"Server variable '{name}' is not declared for {server.url}")
            resolved[name] = str(value)
            continue

        if value is None:
            resolved[name] = variable.default
        elif not variable.enum:
            resolved[name] = str(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value < len(variable.enum):
                raise ServerVariableIndexError(
                    f"index {value} out of range for enum of server variable: {name}; "
                    f"enum max index is {len(variable.enum) - 1}",
                    variable=name,
                    index=value,
                    enum=variable.enum,
                )
            resolved[name] = variable.enum[value]
        elif str(value) in variable.enum:
            resolved[name] = str(value)
        else:
            raise InvalidServerVariableError(
                f"{value} is not a valid entry for server variable {name}; "
                f"variable must be one of: {', '.join(variable.enum)}",
                variable=name,
                value=str(value),
                enum=variable.enum,
            )

    return substitute_path(server.url, resolved)


def resolve_base_url(
    document: Mapping[str, Any] | None,
    selector: ServerSelector | None = 0,
    overrides: VariableOverrides | None = None,
    operation: Operation | None = None,
) -> str | None:
    """Compute the effective base URL for ``operation`` (or the document default)."""
    if document is None:
        return None

    if operation is not None and operation.servers:
        return operation.servers[0].url

    server = select_server(document, selector)
    if server is None:
        logger.debug(f"No server matches selector {selector!r}")
        return None

    return resolve_server_url(server, overrides)
