"""Configuration for OpenAPI clients.

Settings resolve from explicit values, environment variables, a .env file
(python-dotenv) and defaults, in that order.

Example:
    ```python
    from openapi_client_httpx.config import ClientSettings

    settings = ClientSettings.from_env()  # reads OPENAPI_DEFINITION, OPENAPI_TOKEN, ...
    ```
"""

from openapi_client_httpx.config.resolver import SettingResolver
from openapi_client_httpx.config.settings import ClientSettings, parse_server_selector, parse_server_variables

__all__ = [
    "ClientSettings",
    "SettingResolver",
    "parse_server_selector",
    "parse_server_variables",
]
