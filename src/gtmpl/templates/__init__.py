"""Template registry for gtmpl."""

from .closest import ClosestMatch
from .registry import (
    TEMPLATE_PROPERTIES,
    Templates,
    all_names,
    defaults,
    get_template,
    list_templates,
    merge,
    merge_templates,
    update_template,
)

__all__ = [
    "ClosestMatch",
    "TEMPLATE_PROPERTIES",
    "Templates",
    "all_names",
    "defaults",
    "get_template",
    "list_templates",
    "merge",
    "merge_templates",
    "update_template",
]
