"""OpenAPI client built at runtime from an API definition.

Every operation in the definition becomes an async method taking
``(params=None, data=None, config=None)``:

```python
from openapi_client_httpx import OpenAPIClient

async with OpenAPIClient("openapi.yaml") as api:
    response = await api.getPetById(1)  # GET /pets/1
    response = await api.getPets({"q": ["cats", "dogs"]})  # GET /pets?q=cats&q=dogs
    response = await api.createPet(None, {"name": "Garfield"})  # POST /pets, JSON body
    response = await api.paths["/pets/{petId}"].delete(1)
    response = await api.getPetById(1, config={"headers": {"x-trace": "1"}, "timeout": 5})
```

Operation methods live in a registry (``api.operations``), populated once by
``init()`` / ``init_sync()``; attribute access reads from the same registry.
Operations without an ``operationId`` are reachable only through ``api.paths``.
"""

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

import httpx

from openapi_client_httpx.config.settings import ClientSettings
from openapi_client_httpx.errors.exceptions import OperationNotFoundError, TooManyArgumentsError
from openapi_client_httpx.loader import DocumentSource, dereference, is_url, load_document, load_document_sync
from openapi_client_httpx.operations import OperationCatalog
from openapi_client_httpx.parameters import resolve_request
from openapi_client_httpx.servers import ServerSelector, VariableOverrides, resolve_base_url
from openapi_client_httpx.transport.request import TransportRequest, build_transport_request
from openapi_client_httpx.transport.runner import HttpxRunner, Runner
from openapi_client_httpx.types import Operation, RequestConfig

logger = logging.getLogger(__name__)

DEFAULT_RUNNER_KEY = "default"

_ARGUMENT_NAMES = ("params", "data", "config")

OperationCallable = Callable[..., Awaitable[Any]]
TransformOperationMethod = Callable[[OperationCallable, Operation], OperationCallable]


def bind_operation_arguments(args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> tuple[Any, Any, Any]:
    """Normalize operation-method arguments to ``(params, data, config)``.

    Raises:
        TooManyArgumentsError: More than three positional arguments
        TypeError: Unknown or duplicated keyword arguments
    """
    if len(args) > len(_ARGUMENT_NAMES):
        raise TooManyArgumentsError(
            f"Operation methods take at most {len(_ARGUMENT_NAMES)} positional arguments "
            f"(params, data, config), got {len(args)}"
        )

    bound = dict(zip(_ARGUMENT_NAMES, args, strict=False))
    for name, value in (kwargs or {}).items():
        if name not in _ARGUMENT_NAMES:
            raise TypeError(f"Unexpected keyword argument '{name}'")
        if name in bound:
            raise TypeError(f"Got multiple values for argument '{name}'")
        bound[name] = value

    return bound.get("params"), bound.get("data"), bound.get("config")


class OperationMethod:
    """Callable bound to one operation of one client."""

    def __init__(self, api: "OpenAPIClient", operation: Operation):
        self._api = api
        self.operation = operation

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        arguments = bind_operation_arguments(args, kwargs)
        transport_request = self._api.get_transport_request_for_operation(self.operation, arguments)
        runner = self._api.get_runner(self.operation.operation_id)
        return await runner.run_request(transport_request, self.operation, runner.context)

    def __repr__(self) -> str:
        return f"<OperationMethod {self.operation.method.upper()} {self.operation.path}>"


class PathMethods:
    """Operation methods of one path, by HTTP method: ``paths["/pets"].get()``."""

    def __init__(self, methods: Mapping[str, OperationCallable]):
        self._methods = dict(methods)

    def __getitem__(self, method: str) -> OperationCallable:
        return self._methods[method.lower()]

    def __getattr__(self, method: str) -> OperationCallable:
        methods = self.__dict__.get("_methods") or {}
        if method in methods:
            return methods[method]
        raise AttributeError(f"No '{method}' operation on this path")

    def __contains__(self, method: object) -> bool:
        return isinstance(method, str) and method.lower() in self._methods

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"PathMethods({list(self._methods)})"


class OpenAPIClient:
    """Client whose methods are synthesized from an OpenAPI v3 definition.

    Args:
        definition: Document mapping, file path, or http(s) URL
        with_server: Default server: index into ``servers``, a server
            description, or a Server / ``{"url": ...}`` mapping (default: 0)
        base_url_variables: Server variable overrides; ints index the
            variable's enum, strings must be enum members
        transform_operation_name: Maps an operationId to its method name
        transform_operation_method: Wraps each operation method, given the
            method and its Operation
        apply_method_common_headers: Also apply ``method_headers[method]``
        default_headers: Headers sent with every operation call
        method_headers: Default headers per HTTP method (``{"post": {...}}``)
        request_runner: ``async (TransportRequest) -> response`` replacing the
            default httpx runner
        http_client: Caller-owned ``httpx.AsyncClient`` (not closed by us)
        http_client_options: Keyword arguments for the ``httpx.AsyncClient``
            created when ``http_client`` is not given
        strict_path_params: Raise MissingPathParameterError instead of
            substituting ``"undefined"`` for missing path parameters

    Note:
        ``with_server()`` mutates shared state without locking. Don't change
        servers while requests that depend on the choice are being resolved.
    """

    def __init__(
        self,
        definition: DocumentSource,
        *,
        with_server: ServerSelector = 0,
        base_url_variables: VariableOverrides | None = None,
        transform_operation_name: Callable[[str], str] | None = None,
        transform_operation_method: TransformOperationMethod | None = None,
        apply_method_common_headers: bool = False,
        default_headers: Mapping[str, Any] | None = None,
        method_headers: Mapping[str, Mapping[str, Any]] | None = None,
        request_runner: Callable[[TransportRequest], Awaitable[Any]] | None = None,
        http_client: httpx.AsyncClient | None = None,
        http_client_options: Mapping[str, Any] | None = None,
        strict_path_params: bool = False,
    ):
        self.input_document = definition
        self.document: dict[str, Any] | None = None
        self.definition: dict[str, Any] | None = None
        self.initialized = False

        self._default_server: ServerSelector = with_server
        self._base_url_variables: dict[str, int | str] = dict(base_url_variables or {})
        self._transform_operation_name = transform_operation_name or (lambda operation_id: operation_id)
        self._transform_operation_method = transform_operation_method or (lambda method, operation: method)
        self.apply_method_common_headers = apply_method_common_headers
        self.default_headers: dict[str, Any] = dict(default_headers or {})
        self.method_headers: dict[str, dict[str, Any]] = {
            method.lower(): dict(headers) for method, headers in (method_headers or {}).items()
        }
        self.strict_path_params = strict_path_params

        self._http_client = http_client
        self._http_client_options = dict(http_client_options or {})
        self._owns_http_client = http_client is None

        self._catalog: OperationCatalog | None = None
        self._operation_methods: dict[str, OperationCallable] = {}
        self._paths: dict[str, PathMethods] = {}

        if request_runner is not None:
            default_runner = Runner(lambda request, operation, context: request_runner(request))
        else:
            default_runner = Runner(self._run_with_httpx)
        self._runners: dict[str, Runner] = {DEFAULT_RUNNER_KEY: default_runner}

    @classmethod
    def from_env(
        cls,
        prefix: str = "OPENAPI_",
        *,
        settings: ClientSettings | None = None,
        dotenv_path: str | Path | None = None,
        **options: Any,
    ) -> "OpenAPIClient":
        """Build a client from ``ClientSettings`` (environment / .env).

        Keyword ``options`` are passed to the constructor; ``default_headers``
        and ``http_client_options`` merge over the settings-derived values.
        """
        settings = settings or ClientSettings.from_env(prefix, dotenv_path=dotenv_path)
        default_headers = {**settings.default_headers(), **(options.pop("default_headers", None) or {})}
        http_client_options = {**settings.http_client_options(), **(options.pop("http_client_options", None) or {})}
        options.setdefault("with_server", settings.server)
        options.setdefault("base_url_variables", settings.server_variables)
        return cls(
            settings.definition,
            default_headers=default_headers,
            http_client_options=http_client_options,
            **options,
        )

    # -- lifecycle -----------------------------------------------------------

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The httpx client used by the default runner (created on first use)."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(**self._http_client_options)
        return self._http_client

    async def init(self) -> "OpenAPIClient":
        """Load (file or URL) and dereference the definition, then build the method registry."""
        # only a URL definition needs the http client this early
        http_client = self.http_client if is_url(self.input_document) else None
        self.document = await load_document(self.input_document, http_client=http_client)
        self._build()
        return self

    def init_sync(self) -> "OpenAPIClient":
        """Synchronous ``init()`` for mapping and local file definitions.

        Raises:
            DocumentLoadError: If the definition is a URL
        """
        self.document = load_document_sync(self.input_document)
        self._build()
        return self

    async def get_client(self) -> "OpenAPIClient":
        if not self.initialized:
            return await self.init()
        return self

    async def aclose(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "OpenAPIClient":
        try:
            return await self.get_client()
        except BaseException:
            await self.aclose()
            raise

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _build(self) -> None:
        self.definition = dereference(self.document or {})
        self._catalog = OperationCatalog(self.definition)

        self._operation_methods = {}
        for operation in self._catalog:
            if operation.operation_id:
                name = self._transform_operation_name(operation.operation_id)
                self._operation_methods[name] = self._create_operation_method(operation)

        grouped = self._catalog.by_path()
        self._paths = {}
        for path in self.definition.get("paths") or {}:
            methods = grouped.get(path, {})
            self._paths[path] = PathMethods(
                {method.value: self._create_operation_method(operation) for method, operation in methods.items()}
            )

        self.initialized = True
        logger.debug(
            f"Initialized client with {len(self._catalog)} operations, "
            f"{len(self._operation_methods)} operation methods"
        )

    def _create_operation_method(self, operation: Operation) -> OperationCallable:
        return self._transform_operation_method(OperationMethod(self, operation), operation)

    # -- registry ------------------------------------------------------------

    @property
    def operations(self) -> Mapping[str, OperationCallable]:
        """Operation methods by (transformed) operationId; read-only."""
        return MappingProxyType(self._operation_methods)

    @property
    def paths(self) -> Mapping[str, PathMethods]:
        """Operation methods by literal path template, then HTTP method; read-only."""
        return MappingProxyType(self._paths)

    def __getattr__(self, name: str) -> OperationCallable:
        methods = self.__dict__.get("_operation_methods") or {}
        if name in methods:
            return methods[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # -- servers -------------------------------------------------------------

    def with_server(self, server: ServerSelector, variables: VariableOverrides | None = None) -> None:
        """Change the default server (and its variable overrides) for subsequent calls."""
        self._default_server = server
        self._base_url_variables = dict(variables or {})

    def get_base_url(self, operation: Operation | str | None = None) -> str | None:
        """Resolve the base URL for ``operation``, or the default one.

        Raises:
            ServerVariableIndexError: An enum index override is out of range
            InvalidServerVariableError: A string override is not in the enum
        """
        if isinstance(operation, str):
            operation = self._require_operation(operation)
        return resolve_base_url(self.definition, self._default_server, self._base_url_variables, operation)

    def _transport_base_url(self, operation: Operation) -> str | None:
        if operation.servers:
            return operation.servers[0].url
        # a caller-supplied client with its own base_url keeps it
        if not self._owns_http_client and self._http_client is not None and str(self._http_client.base_url):
            return None
        return self.get_base_url()

    # -- operations ----------------------------------------------------------

    def get_operations(self) -> list[Operation]:
        if self._catalog is None:
            return []
        return list(self._catalog.operations)

    def get_operation(self, operation_id: str) -> Operation | None:
        if self._catalog is None:
            return None
        return self._catalog.get(operation_id)

    def _require_operation(self, operation: Operation | str) -> Operation:
        if isinstance(operation, Operation):
            return operation
        found = self.get_operation(operation)
        if found is None:
            raise OperationNotFoundError(f"Unknown operation: {operation}", operation_id=operation)
        return found

    def _default_headers_for(self, operation: Operation) -> dict[str, Any]:
        headers = dict(self.default_headers)
        if self.apply_method_common_headers:
            headers.update(self.method_headers.get(operation.method.value, {}))
        return headers

    def get_request_config_for_operation(self, operation: Operation | str, args: Sequence[Any] = ()) -> RequestConfig:
        """Resolve ``(params, data, config)`` into a RequestConfig (no I/O).

        Raises:
            OperationNotFoundError: Unknown operationId
            ParameterResolutionError: Arguments don't fit the operation
        """
        operation = self._require_operation(operation)
        params, payload, _ = bind_operation_arguments(args)
        return resolve_request(
            operation,
            params,
            payload,
            base_url=self.get_base_url(operation),
            default_headers=self._default_headers_for(operation),
            strict=self.strict_path_params,
        )

    def get_transport_request_for_operation(
        self, operation: Operation | str, args: Sequence[Any] = ()
    ) -> TransportRequest:
        """Resolve arguments into the TransportRequest handed to the runner."""
        operation = self._require_operation(operation)
        request = self.get_request_config_for_operation(operation, args)
        _, _, config = bind_operation_arguments(args)
        transport_request = build_transport_request(request, config, base_url=self._transport_base_url(operation))
        logger.debug(f"Resolved {operation.operation_id or operation.path}: {request.method.upper()} {request.url}")
        return transport_request

    # -- runners -------------------------------------------------------------

    def register_runner(self, runner: Runner, operation_id: str | None = None) -> None:
        """Register a runner for all operations, or only for ``operation_id``."""
        self._runners[operation_id or DEFAULT_RUNNER_KEY] = runner

    def get_runner(self, operation_id: str | None) -> Runner:
        if operation_id and operation_id in self._runners:
            return self._runners[operation_id]
        return self._runners[DEFAULT_RUNNER_KEY]

    async def _run_with_httpx(
        self, request: TransportRequest, operation: Operation, context: dict[str, Any] | None = None
    ) -> httpx.Response:
        return await HttpxRunner(self.http_client)(request, operation, context)
