"""Loading and dereferencing of OpenAPI documents.

Sources:
- a mapping, used as is
- an ``http://`` / ``https://`` URL, fetched with httpx (JSON or YAML)
- a filesystem path (``.yaml`` / ``.yml`` as YAML, anything else JSON with a
  YAML fallback)

``dereference`` then inlines every internal ``#/...`` reference so the rest of
the client can treat the document as plain nested dicts.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
import jsonref
import yaml

from openapi_client_httpx.errors.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

DocumentSource = Mapping[str, Any] | str | Path


def is_url(source: DocumentSource) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def parse_document(text: str, *, yaml_first: bool = False) -> dict[str, Any]:
    """Parse JSON or YAML text into a document mapping."""
    try:
        document = yaml.safe_load(text) if yaml_first else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        if yaml_first:
            raise DocumentLoadError(f"Invalid YAML document: {e}") from e
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as yaml_error:
            raise DocumentLoadError(f"Document is neither JSON nor YAML: {yaml_error}") from yaml_error

    if not isinstance(document, dict):
        raise DocumentLoadError(f"Expected a mapping at the document root, got {type(document).__name__}")
    return document


def load_document_sync(source: DocumentSource) -> dict[str, Any]:
    """Load a document from a mapping or a local file.

    Raises:
        DocumentLoadError: For URLs, unreadable files or unparsable content
    """
    if isinstance(source, Mapping):
        return dict(source)
    if is_url(source):
        raise DocumentLoadError(f"Cannot load {source} synchronously; use init() for URL definitions")

    path = Path(source).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Cannot read definition file {path}: {e}") from e

    logger.debug(f"Loaded definition from file: {path}")
    return parse_document(text, yaml_first=path.suffix.lower() in (".yaml", ".yml"))


async def load_document(source: DocumentSource, http_client: httpx.AsyncClient | None = None) -> dict[str, Any]:
    """Load a document from a mapping, a local file or a URL.

    Args:
        source: Mapping, file path, or http(s) URL
        http_client: Client used for URL sources; a temporary one is created
            when omitted

    Raises:
        DocumentLoadError: On unparsable content
        httpx.HTTPError: On network failure or a non-2xx response
    """
    if not is_url(source):
        return load_document_sync(source)

    if http_client is None:
        async with httpx.AsyncClient() as client:
            response = await client.get(source)
    else:
        response = await http_client.get(source)
    response.raise_for_status()

    content_type = response.headers.get("content-type", "")
    logger.debug(f"Fetched definition from {source} ({content_type or 'no content type'})")
    return parse_document(response.text, yaml_first="yaml" in content_type or "yml" in content_type)


def _reject_external(uri: str) -> Any:
    raise DocumentLoadError(f"External reference not supported: {uri}")


def dereference(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``document`` with every internal ``$ref`` inlined.

    Resolution is done by ``jsonref``. Every user of a reference target gets
    the same object, so recursive schemas become cyclic structures. The input
    document is not modified.

    Raises:
        DocumentLoadError: On unresolvable or external references
    """
    try:
        return jsonref.replace_refs(document, base_uri="", loader=_reject_external, proxies=False, lazy_load=False)
    except jsonref.JsonRefError as e:
        raise DocumentLoadError(f"Cannot dereference definition: {e}") from e
