"""Structured exceptions for request resolution and client configuration.

Nothing in this module wraps transport failures: whatever the injected runner
raises (``httpx.HTTPError``, a custom runner's own exceptions) reaches the
caller untouched.
"""


class OpenAPIClientError(Exception):
    """Base exception for errors raised by the client itself."""

    pass


class ConfigurationError(OpenAPIClientError):
    """Malformed construction options or server selection."""

    pass


class ServerVariableIndexError(ConfigurationError):
    """A numeric server variable override points outside the variable's enum."""

    def __init__(self, message: str, variable: str, index: int, enum: tuple[str, ...] = ()):
        super().__init__(message)
        self.variable = variable
        self.index = index
        self.enum = enum


class InvalidServerVariableError(ConfigurationError):
    """A string server variable override is not one of the variable's enum values."""

    def __init__(self, message: str, variable: str, value: str, enum: tuple[str, ...] = ()):
        super().__init__(message)
        self.variable = variable
        self.value = value
        self.enum = enum


class SettingNotFoundError(ConfigurationError):
    """Raised when a required setting cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class DocumentLoadError(OpenAPIClientError):
    """The API definition could not be loaded, parsed or dereferenced."""

    pass


class OperationNotFoundError(OpenAPIClientError):
    """No operation matches the requested operationId."""

    def __init__(self, message: str, operation_id: str | None = None):
        super().__init__(message)
        self.operation_id = operation_id


class ParameterResolutionError(OpenAPIClientError):
    """Call arguments could not be mapped onto the operation's parameters."""

    pass


class NoParametersAvailableError(ParameterResolutionError):
    """A bare scalar was passed to an operation that declares no parameters."""

    pass


class TooManyArgumentsError(ParameterResolutionError):
    """More positional arguments than ``(params, data, config)``."""

    pass


class MissingPathParameterError(ParameterResolutionError):
    """A path template variable has no value (strict mode only)."""

    def __init__(self, message: str, missing: list[str]):
        super().__init__(message)
        self.missing = missing
