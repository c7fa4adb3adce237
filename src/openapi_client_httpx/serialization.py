"""Query string and path template serialization.

Query parameters follow the OpenAPI 3 ``style`` / ``explode`` rules:

| Type      | style          | explode | ``id=[3, 4, 5]`` / ``{"role": "admin"}`` |
|-----------|----------------|---------|------------------------------------------|
| array     | form           | true    | ``id=3&id=4&id=5``                       |
| array     | form           | false   | ``id=3,4,5``                             |
| array     | spaceDelimited | false   | ``id=3%204%205``                         |
| array     | pipeDelimited  | false   | ``id=3%7C4%7C5``                         |
| object    | deepObject     | true    | ``id[role]=admin``                       |
| object    | form           | true    | ``role=admin``                           |
| object    | form           | false   | ``id=role,admin``                        |

Combinations OpenAPI disallows (delimited + explode, deepObject without
explode) degrade to the nearest form serialization instead of failing.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from openapi_client_httpx.types import Operation, Parameter

# Characters encodeURIComponent leaves alone, besides alphanumerics and "_.-~"
_URI_COMPONENT_SAFE = "!'()*"

_TEMPLATE_TOKEN = re.compile(r"{([^{}]+)}")

_DELIMITERS = {
    "spaceDelimited": "%20",
    "pipeDelimited": "%7C",
}


def encode_uri_component(value: Any) -> str:
    """Percent-encode a single URI component (same safe set as ``encodeURIComponent``)."""
    return quote(stringify(value), safe=_URI_COMPONENT_SAFE)


def stringify(value: Any) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def serialize_query_parameter(param: Parameter | None, name: str, value: Any) -> list[str]:
    """Serialize one query parameter into ``key=value`` fragments.

    Args:
        param: Declared parameter (None for ad hoc parameters)
        name: Parameter name
        value: Primitive, list/tuple, or mapping

    Returns:
        Fragments to be joined with ``&``; empty for None and empty containers
    """
    style = (param.style if param else None) or "form"
    explode = param.explode if param is not None and param.explode is not None else True

    if value is None:
        return []
    if isinstance(value, list | tuple):
        return _serialize_array(name, value, style, explode)
    if isinstance(value, Mapping):
        return _serialize_object(name, value, style, explode)
    return [f"{encode_uri_component(name)}={encode_uri_component(value)}"]


def _serialize_array(name: str, value: Iterable[Any], style: str, explode: bool) -> list[str]:
    items = [encode_uri_component(item) for item in value]
    if not items:
        return []

    key = encode_uri_component(name)
    if explode or style not in ("form", *_DELIMITERS):
        return [f"{key}={item}" for item in items]

    delimiter = _DELIMITERS.get(style, ",")
    return [f"{key}={delimiter.join(items)}"]


def _serialize_object(name: str, value: Mapping[str, Any], style: str, explode: bool) -> list[str]:
    if not value:
        return []

    key = encode_uri_component(name)
    if style == "deepObject" and explode:
        return [f"{key}[{encode_uri_component(k)}]={encode_uri_component(v)}" for k, v in value.items()]

    if style in ("form", "deepObject") and not explode:
        pairs = []
        for k, v in value.items():
            pairs.append(encode_uri_component(k))
            pairs.append(encode_uri_component(v))
        return [f"{key}={','.join(pairs)}"]

    # form explode=true flattens the keys to the top level
    return [f"{encode_uri_component(k)}={encode_uri_component(v)}" for k, v in value.items()]


def build_query_string(operation: Operation | None, query: Mapping[str, Any]) -> str:
    """Serialize a ``name -> raw value`` mapping using the operation's declared styles."""
    fragments: list[str] = []
    for name, value in query.items():
        param = operation.find_parameter(name) if operation else None
        fragments.extend(serialize_query_parameter(param, name, value))
    return "&".join(fragments)


def template_names(template: str) -> list[str]:
    """Return the ``{name}`` tokens of a path or URL template, in order."""
    return _TEMPLATE_TOKEN.findall(template)


def substitute_path(template: str, values: Mapping[str, str]) -> str:
    """Replace every ``{name}`` token in ``template`` with ``values[name]``.

    Values are substituted as given; callers encode them first.
    """
    return _TEMPLATE_TOKEN.sub(lambda match: values[match.group(1)], template)
