"""Error taxonomy for OpenAPI clients."""

from openapi_client_httpx.errors.exceptions import (
    ConfigurationError,
    DocumentLoadError,
    InvalidServerVariableError,
    MissingPathParameterError,
    NoParametersAvailableError,
    OpenAPIClientError,
    OperationNotFoundError,
    ParameterResolutionError,
    ServerVariableIndexError,
    SettingNotFoundError,
    TooManyArgumentsError,
)

__all__ = [
    "ConfigurationError",
    "DocumentLoadError",
    "InvalidServerVariableError",
    "MissingPathParameterError",
    "NoParametersAvailableError",
    "OpenAPIClientError",
    "OperationNotFoundError",
    "ParameterResolutionError",
    "ServerVariableIndexError",
    "SettingNotFoundError",
    "TooManyArgumentsError",
]
