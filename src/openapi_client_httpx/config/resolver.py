"""Multi-source setting resolution.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Example:
    ```python
    from openapi_client_httpx.config import SettingResolver

    resolver = SettingResolver()
    definition = resolver.resolve(env_var_name="OPENAPI_DEFINITION", required=True)
    token = resolver.resolve_from_file(env_var_name="OPENAPI_TOKEN_FILE")
    ```

Secret values are never logged; only the source they came from is.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from openapi_client_httpx.errors.exceptions import ConfigurationError, SettingNotFoundError

logger = logging.getLogger(__name__)


class SettingResolver:
    """Resolve settings from explicit values, the environment, a .env file or defaults.

    The .env file is loaded at most once per resolver (guarded by a lock), and
    never overrides variables already present in the environment.
    """

    def __init__(self, dotenv_path: str | Path | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to a .env file. If None, python-dotenv searches
                parent directories.
            load_dotenv: Set to False to skip .env loading entirely.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            load_dotenv(dotenv_path=self._dotenv_path)
            self._dotenv_loaded = True
            logger.debug("Loaded .env file for setting resolution")

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        secret: bool = False,
    ) -> str | None:
        """Resolve a setting (first match wins).

        Args:
            value: Explicit value; all other sources are ignored when given.
            env_var_name: Environment variable to check (.env values included).
            default: Fallback when no other source has a value.
            required: Raise SettingNotFoundError when nothing resolves.
            secret: Mask the value in log messages.

        Returns:
            The resolved value, or None.

        Raises:
            SettingNotFoundError: If ``required`` and no source has a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if secret else result
            logger.debug(f"Resolved setting from {source}: {shown}")

        if required and result is None:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise SettingNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a setting from a file whose path is given directly or via ``env_var_name``.

        ``~`` and ``$VAR`` are expanded in the path; the contents are stripped.

        Raises:
            ConfigurationError: If ``required`` and the file cannot be read.
        """
        path_to_use = None
        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name)

        if not path_to_use:
            if required:
                raise ConfigurationError(f"No file path provided (env var '{env_var_name}' not set)")
            return None

        path = Path(os.path.expanduser(os.path.expandvars(path_to_use)))
        try:
            content = path.read_text().strip()
        except OSError as e:
            error_msg = f"Cannot read setting file {path}: {e}"
            if required:
                raise ConfigurationError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved setting from file: {path} (***)")
        return content
