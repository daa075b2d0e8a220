"""Query-string serialization.

Each query value is classified once into one of three shapes and then
serialized by shape:

* ``ListParam``: a plain list or tuple, repeated as ``key=v1&key=v2``.
* ``DefinitionParam``: a :class:`QueryDefinition` (or a mapping carrying an
  ``exploded`` key) that spells out how a single key should be encoded.
* ``ScalarParam``: everything else, rendered with ``key=<value>``.

Serialization never raises. Shapes that look like a definition but do not
validate as one fall back to the scalar path.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Literal, Mapping, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, ValidationError

from .validators import is_array, is_defined, is_function, is_object

ExplodeFormat = Literal["brackets", "index", "default"]

# Characters encodeURIComponent leaves alone on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"


class QueryDefinition(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    exploded: bool
    explode_format: ExplodeFormat = "default"
    separator: str | None = None
    url_encode: bool = True
    value: Any = None


@dataclass(frozen=True)
class ScalarParam:
    key: str
    value: Any


@dataclass(frozen=True)
class ListParam:
    key: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class DefinitionParam:
    key: str
    definition: QueryDefinition


QueryParam = Union[ScalarParam, ListParam, DefinitionParam]
QueryInput = Union[Mapping[str, Any], Callable[[], Mapping[str, Any]], None]


def encode_component(value: Any) -> str:
    return quote(stringify(value), safe=_URI_COMPONENT_SAFE)


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def exploded_param_suffix(explode_format: str, index: int) -> str:
    if explode_format == "brackets":
        return "[]"
    if explode_format == "index":
        return f"[{index}]"
    return ""


def _coerce_definition(value: Any) -> QueryDefinition | None:
    if isinstance(value, QueryDefinition):
        return value
    if not is_object(value) or not is_defined(value.get("exploded")):
        return None
    data = dict(value)
    # Accept the camelCase spelling used by JavaScript callers.
    if "explodeFormat" in data:
        data.setdefault("explode_format", data.pop("explodeFormat"))
    if "urlEncode" in data:
        data.setdefault("url_encode", data.pop("urlEncode"))
    try:
        return QueryDefinition.model_validate(data)
    except ValidationError:
        return None


def classify(key: str, value: Any) -> QueryParam:
    if is_array(value):
        return ListParam(key=key, values=tuple(value))
    definition = _coerce_definition(value)
    if definition is not None:
        return DefinitionParam(key=key, definition=definition)
    return ScalarParam(key=key, value=value)


def _serialize_definition(key: str, definition: QueryDefinition) -> str:
    separator = definition.separator or ","

    def render(item: Any) -> str:
        return encode_component(item) if definition.url_encode else stringify(item)

    if is_array(definition.value):
        if definition.exploded:
            return "&".join(
                f"{key}{exploded_param_suffix(definition.explode_format, index)}={render(item)}"
                for index, item in enumerate(definition.value)
            )
        return f"{key}={separator.join(render(item) for item in definition.value)}"

    return f"{key}={render(definition.value)}"


def serialize_param(param: QueryParam) -> str:
    if isinstance(param, ListParam):
        return "&".join(f"{param.key}={encode_component(item)}" for item in param.values)
    if isinstance(param, DefinitionParam):
        return _serialize_definition(param.key, param.definition)
    return f"{param.key}={stringify(param.value)}"


def serialize_query(query: QueryInput) -> str:
    """Turn a query mapping (or a producer of one) into ``?a=1&b=2``.

    Returns an empty string when there is nothing to serialize.
    """
    resolved = query() if is_function(query) else query
    if not resolved or not is_object(resolved):
        return ""

    fragments = []
    for key, value in resolved.items():
        if value is None:
            continue
        fragment = serialize_param(classify(str(key), value))
        if fragment:
            fragments.append(fragment)

    query_string = "&".join(fragments).rstrip("&")
    return f"?{query_string}" if query_string else ""
