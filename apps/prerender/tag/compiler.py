# apps/prerender/tag/compiler.py
from __future__ import annotations

import logging
from typing import Optional

from apps.prerender.exceptions import InvalidContainerError, TagSyntaxError
from apps.prerender.markup import TAG_KEY, check_attribute_name, check_tag_name
from apps.prerender.tag.ir import (
    ArrayLiteral,
    ComponentPath,
    Expression,
    Literal,
    ReactFragment,
    Variable,
    resolve_component_path,
)
from apps.prerender.tag.literals import parse_expression
from apps.prerender.tag.parser import ParsedTag

log = logging.getLogger("prerender.tag.compiler")


def _compile_component(parser, parsed: ParsedTag, component_root: str) -> ComponentPath:
    args = parsed.arguments
    if args.component_is_literal:
        return ComponentPath(root=component_root, resolved=resolve_component_path(component_root, args.component_ref))
    reference = Variable(args.component_ref, parser.compile_filter(args.component_ref))
    return ComponentPath(root=component_root, reference=reference)


def _check_static_props(props: Expression) -> None:
    if isinstance(props, ArrayLiteral):
        raise TagSyntaxError("Component props must be a mapping, got an array literal.")
    if isinstance(props, Literal) and props.value not in (None, "") and not isinstance(props.value, dict):
        raise TagSyntaxError(f"Component props must be a mapping, got {props.value!r}.")


def _check_static_container(container: Expression) -> None:
    """Whatever can be checked before render: literal tag names and attribute keys."""
    if isinstance(container, Variable):
        return
    if isinstance(container, Literal):
        if container.value is None or container.value == "":
            return
        check_tag_name(container.value)
        return
    if isinstance(container, ArrayLiteral):
        raise InvalidContainerError("Container must be a tag name or a mapping, got an array literal.")

    tag = container.get(TAG_KEY)
    if tag is None:
        raise InvalidContainerError('Container mapping requires a "tag" key.')
    if isinstance(tag, Literal):
        check_tag_name(tag.value)
    for key in container.keys():
        if key != TAG_KEY:
            check_attribute_name(key)


def compile_tag(
    parser,
    parsed: ParsedTag,
    *,
    component_root: str,
    extension: str = "react",
) -> ReactFragment:
    """
    Turns parsed tag arguments into a ReactFragment.
    Anything the argument parser forwarded is an error here.
    """
    if parsed.forwarded:
        raise TagSyntaxError(f'Unexpected argument "{parsed.forwarded[0].text}" in {parsed.tag_name} tag.')

    args = parsed.arguments
    component = _compile_component(parser, parsed, component_root)

    props: Optional[Expression] = None
    if args.props_expr is not None:
        props = parse_expression(args.props_expr, parser)
        _check_static_props(props)

    container: Optional[Expression] = None
    if args.container_expr is not None:
        container = parse_expression(args.container_expr, parser)
        _check_static_container(container)

    fragment = ReactFragment(
        tag_name=parsed.tag_name,
        component=component,
        props=props,
        container=container,
        extension=extension,
    )
    log.debug(
        "compiled %s tag: component=%s props=%s container=%s",
        parsed.tag_name,
        component.resolved or args.component_ref,
        args.props_expr,
        args.container_expr,
    )
    return fragment
