# apps/prerender/markup.py
"""
Markup helpers for the hydration fragment:

    <TAG attr="..." data-react-class="PATH" data-react-props="JSON">BODY</TAG>

Container attributes come first (insertion order), then the two reserved
attributes read by the client-side mount script.
"""
from __future__ import annotations

import json
import re
from typing import Any, Callable, List, Mapping, Tuple

from django.core.serializers.json import DjangoJSONEncoder

from .exceptions import AttributeConflictError, InvalidContainerError, InvalidPropsError

CLASS_ATTR = "data-react-class"
PROPS_ATTR = "data-react-props"
RESERVED_ATTRS = frozenset({CLASS_ATTR, PROPS_ATTR})
TAG_KEY = "tag"
DEFAULT_CONTAINER = {TAG_KEY: "div"}

TAG_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")
# HTML attribute names: no whitespace, quotes, '>', '/', '=' or control chars
ATTR_NAME_RE = re.compile(r"[^\s\"'>/=\x00-\x1f]+")


def escape_quotes(value: str) -> str:
    """Replace every double quote with &quot; (all occurrences)."""
    return value.replace('"', "&quot;")


def serialize_props(props: Mapping[str, Any]) -> str:
    """Compact JSON, escaped for a double-quoted attribute."""
    text = json.dumps(props, cls=DjangoJSONEncoder, separators=(",", ":"), ensure_ascii=False)
    return escape_quotes(text)


def normalize_props(props: Any) -> dict:
    if props is None or props == "":
        return {}
    if not isinstance(props, Mapping):
        raise InvalidPropsError(f"Component props must be a mapping, got {type(props).__name__}.")
    return dict(props)


def check_tag_name(tag: Any) -> str:
    if not isinstance(tag, str) or not TAG_NAME_RE.fullmatch(tag):
        raise InvalidContainerError(f"Invalid container tag name: {tag!r}.")
    return tag


def check_attribute_name(name: Any) -> str:
    if not isinstance(name, str) or not ATTR_NAME_RE.fullmatch(name):
        raise InvalidContainerError(f"Invalid container attribute name: {name!r}.")
    if name in RESERVED_ATTRS:
        raise AttributeConflictError(name)
    return name


def normalize_container(container: Any) -> Tuple[str, List[Tuple[str, str]]]:
    """
    Returns (tag_name, [(attr, value), ...]) from a container descriptor.
      - None / ""    -> <div>
      - "span"       -> <span>
      - {"tag": ...} -> tag + remaining keys as attributes
    None/False attribute values are dropped.
    """
    if container is None or container == "":
        container = DEFAULT_CONTAINER
    if isinstance(container, str):
        return check_tag_name(container), []
    if not isinstance(container, Mapping):
        raise InvalidContainerError(
            f"Container must be a tag name or a mapping, got {type(container).__name__}."
        )
    if TAG_KEY not in container:
        raise InvalidContainerError('Container mapping requires a "tag" key.')

    tag = check_tag_name(container[TAG_KEY])
    attrs: List[Tuple[str, str]] = []
    for key, value in container.items():
        if key == TAG_KEY:
            continue
        check_attribute_name(key)
        if value is None or value is False:
            continue
        attrs.append((key, escape_quotes(str(value))))
    return tag, attrs


def open_tag(tag: str, attrs: List[Tuple[str, str]], component_path: str, props_json: str) -> str:
    out = "<" + tag
    for key, value in attrs:
        out += f' {key}="{value}"'
    out += f' {CLASS_ATTR}="{escape_quotes(component_path)}"'
    out += f' {PROPS_ATTR}="{props_json}">'
    return out


def render_fragment(
    container: Any,
    component_path: str,
    props: Any,
    render: Callable[[str, dict], Any],
) -> str:
    """
    Assemble the full fragment. The container is validated before the component
    renders.
    """
    props = normalize_props(props)
    tag, attrs = normalize_container(container)
    body = render(component_path, props)
    return open_tag(tag, attrs, component_path, serialize_props(props)) + str(body) + f"</{tag}>"
