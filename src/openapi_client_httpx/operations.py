"""Flattening of the document's path/method tree into Operation records."""

import logging
from collections.abc import Mapping
from typing import Any

from openapi_client_httpx.types import HttpMethod, Operation, Parameter, Server

logger = logging.getLogger(__name__)


def get_operations(document: Mapping[str, Any] | None) -> list[Operation]:
    """Flatten ``document["paths"]`` into a list of operations.

    Order follows path insertion order, then ``HttpMethod`` declaration order.
    Path-item ``parameters`` and ``servers`` are appended after the operation's
    own, and ``security`` falls back to the document's top-level value.
    """
    if not document:
        return []

    operations: list[Operation] = []
    document_security = document.get("security")
    for path, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, Mapping):
            continue

        path_parameters = path_item.get("parameters") or []
        path_servers = path_item.get("servers") or []

        for method in HttpMethod:
            operation_object = path_item.get(method.value)
            if not isinstance(operation_object, Mapping):
                continue

            spec: dict[str, Any] = {**operation_object, "path": path, "method": method.value}
            parameters = [*(operation_object.get("parameters") or []), *path_parameters]
            servers = [*(operation_object.get("servers") or []), *path_servers]
            security = operation_object.get("security", document_security)
            spec["parameters"] = parameters
            spec["servers"] = servers
            spec["security"] = security

            operations.append(
                Operation(
                    path=path,
                    method=method,
                    operation_id=operation_object.get("operationId"),
                    parameters=tuple(Parameter.from_dict(param) for param in parameters),
                    servers=tuple(Server.from_dict(server) for server in servers),
                    security=tuple(security) if security is not None else None,
                    spec=spec,
                )
            )

    return operations


def get_operation(document: Mapping[str, Any] | None, operation_id: str) -> Operation | None:
    """Find an operation by operationId (first match wins)."""
    for operation in get_operations(document):
        if operation.operation_id == operation_id:
            return operation
    return None


class OperationCatalog:
    """Cached view over a document's operations.

    The document is treated as immutable, so flattening happens once.

    Example:
        ```python
        catalog = OperationCatalog(document)
        operation = catalog.get("getPetById")
        same = catalog.find("/pets/{petId}", "get")
        ```
    """

    def __init__(self, document: Mapping[str, Any]):
        self._document = document
        self._operations: list[Operation] | None = None
        self._by_id: dict[str, Operation] = {}

    @property
    def operations(self) -> list[Operation]:
        if self._operations is None:
            self._operations = self._flatten()
        return self._operations

    def _flatten(self) -> list[Operation]:
        operations = get_operations(self._document)
        for operation in operations:
            if operation.operation_id is None:
                continue
            if operation.operation_id in self._by_id:
                logger.warning(
                    f"Duplicate operationId '{operation.operation_id}' at "
                    f"{operation.method.upper()} {operation.path}, keeping the first"
                )
                continue
            self._by_id[operation.operation_id] = operation
        logger.debug(f"Flattened {len(operations)} operations")
        return operations

    def __iter__(self):
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def get(self, operation_id: str) -> Operation | None:
        if self._operations is None:
            self._operations = self._flatten()
        return self._by_id.get(operation_id)

    def find(self, path: str, method: HttpMethod | str) -> Operation | None:
        for operation in self.operations:
            if operation.path == path and operation.method == method.lower():
                return operation
        return None

    def by_path(self) -> dict[str, dict[HttpMethod, Operation]]:
        """Group operations as ``{path: {method: operation}}`` in catalog order."""
        grouped: dict[str, dict[HttpMethod, Operation]] = {}
        for operation in self.operations:
            grouped.setdefault(operation.path, {})[operation.method] = operation
        return grouped
