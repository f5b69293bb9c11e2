from django import template

from apps.prerender.tag.nodes import react_tag

register = template.Library()

register.tag("react", react_tag)
