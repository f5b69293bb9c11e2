# apps/prerender/tag/nodes.py
from __future__ import annotations

from typing import Optional

from django import template
from django.utils.safestring import mark_safe

from apps.prerender.conf import get_config
from apps.prerender.extensions import EXTENSION_NAME, get_extension
from apps.prerender.markup import render_fragment
from apps.prerender.tag.compiler import compile_tag
from apps.prerender.tag.ir import ReactFragment
from apps.prerender.tag.parser import parse_bits


class ReactComponentNode(template.Node):
    def __init__(self, fragment: ReactFragment):
        self.fragment = fragment

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__}: {self.fragment.tag_name}>"

    def render(self, context) -> str:
        fragment = self.fragment
        path = fragment.component.evaluate(context)
        props = fragment.props.evaluate(context) if fragment.props is not None else None
        container = fragment.container.evaluate(context) if fragment.container is not None else None
        render = get_extension(_engine_for(context), fragment.extension)
        return mark_safe(render_fragment(container, path, props, render))


def _engine_for(context):
    tpl = getattr(context, "template", None)
    return tpl.engine if tpl is not None else None


def react_tag(parser, token, *, component_root: Optional[str] = None, extension: str = EXTENSION_NAME):
    """
    Renders a component server-side, wrapped for client hydration.

    Usage:
      {% react 'Header' %}
      {% react 'HelloMessage' with props in 'span' %}
      {% react component_name with {name: user.first_name} in {tag: 'section', class: 'card'} %}

    Output:
      <div data-react-class="/abs/modules/Header" data-react-props="{}">...</div>
    """
    parsed = parse_bits(token.split_contents())
    root = component_root or get_config().component_root
    return ReactComponentNode(compile_tag(parser, parsed, component_root=root, extension=extension))
