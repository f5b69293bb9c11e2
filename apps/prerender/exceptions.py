# apps/prerender/exceptions.py
from __future__ import annotations

from django.template import TemplateSyntaxError

__all__ = [
    "TagSyntaxError",
    "AttributeConflictError",
    "InvalidContainerError",
    "ComponentResolutionError",
    "InvalidPropsError",
]


class TagSyntaxError(TemplateSyntaxError):
    """Malformed arguments in a component tag (raised while compiling)."""


class AttributeConflictError(TagSyntaxError):
    """A container descriptor supplies an attribute reserved for hydration."""

    def __init__(self, attribute: str):
        super().__init__(f'Container attribute "{attribute}" is reserved and cannot be overridden.')
        self.attribute = attribute


class InvalidContainerError(TagSyntaxError):
    """Container descriptor without a usable tag name or with invalid attributes."""


class ComponentResolutionError(LookupError):
    """Component module cannot be located or does not expose a component."""

    def __init__(self, path: str, reason: str):
        super().__init__(path)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Cannot resolve component '{self.path}': {self.reason}"


class InvalidPropsError(TypeError):
    pass
