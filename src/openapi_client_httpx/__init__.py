"""OpenAPI Client httpx - runtime clients synthesized from OpenAPI v3 definitions.

The client reads a definition, flattens its operations and exposes each one
as an async method. Calls are resolved into concrete requests (path
templating, style-aware query serialization, header and cookie parameters,
server variables) and executed through httpx or any registered runner.

Example:
    ```python
    from openapi_client_httpx import OpenAPIClient

    api = OpenAPIClient("https://petstore.example.com/openapi.json")
    await api.init()

    response = await api.getPetById(1)
    config = api.get_request_config_for_operation("getPets", [{"q": "cats"}])
    config.url  # "<server url>/pets?q=cats"
    ```
"""

from openapi_client_httpx.client import OpenAPIClient, OperationMethod, PathMethods
from openapi_client_httpx.transport import HttpxRunner, Runner, TransportRequest
from openapi_client_httpx.types import (
    ByArray,
    ByObject,
    ByScalar,
    ExplicitParam,
    HttpMethod,
    Operation,
    Parameter,
    ParamType,
    RequestConfig,
    Server,
    ServerVariable,
)

__version__ = "0.1.0"

__all__ = [
    "ByArray",
    "ByObject",
    "ByScalar",
    "ExplicitParam",
    "HttpMethod",
    "HttpxRunner",
    "OpenAPIClient",
    "Operation",
    "OperationMethod",
    "ParamType",
    "Parameter",
    "PathMethods",
    "RequestConfig",
    "Runner",
    "Server",
    "ServerVariable",
    "TransportRequest",
    "__version__",
]
