# apps/prerender/tag/ir.py
"""
Compiled form of a component tag.

The compiler builds these nodes once per tag occurrence; ReactComponentNode
evaluates them against the render Context. Expressions compare by their
source text so two tags written differently but meaning the same compile to
equal trees.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from django.template.base import FilterExpression

from apps.prerender.exceptions import ComponentResolutionError


@dataclass(frozen=True)
class Literal:
    value: Any

    def evaluate(self, context) -> Any:
        return self.value


@dataclass(frozen=True)
class Variable:
    source: str
    expression: Optional[FilterExpression] = field(default=None, compare=False, repr=False)

    def evaluate(self, context) -> Any:
        return self.expression.resolve(context, ignore_failures=True)


@dataclass(frozen=True)
class ObjectLiteral:
    entries: Tuple[Tuple[str, "Expression"], ...] = ()

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def get(self, key: str) -> Optional["Expression"]:
        for k, v in self.entries:
            if k == key:
                return v
        return None

    def evaluate(self, context) -> dict:
        return {key: value.evaluate(context) for key, value in self.entries}


@dataclass(frozen=True)
class ArrayLiteral:
    items: Tuple["Expression", ...] = ()

    def evaluate(self, context) -> list:
        return [item.evaluate(context) for item in self.items]


Expression = Union[Literal, Variable, ObjectLiteral, ArrayLiteral]


def resolve_component_path(root: str, ref: str) -> str:
    """root + '/' + ref, normalized to an absolute path. No existence check."""
    return os.path.abspath(f"{root}/{ref}")


@dataclass(frozen=True)
class ComponentPath:
    root: str
    resolved: Optional[str] = None
    reference: Optional[Variable] = None

    @property
    def is_static(self) -> bool:
        return self.resolved is not None

    def evaluate(self, context) -> str:
        if self.resolved is not None:
            return self.resolved
        ref = self.reference.evaluate(context)
        if not isinstance(ref, str) or not ref:
            raise ComponentResolutionError(self.reference.source, f"reference resolved to {ref!r}")
        return resolve_component_path(self.root, ref)


@dataclass(frozen=True)
class ReactFragment:
    tag_name: str
    component: ComponentPath
    props: Optional[Expression] = None
    container: Optional[Expression] = None
    extension: str = "react"
