"""
Templates layer: 로더 + Jinja2 template set + 기본 helper.
"""

from .engine import TemplateSet
from .helpers import H, helper_map
from .loader import TemplateLoader, new

__all__ = [
    # loader
    "TemplateLoader",
    "new",
    # engine
    "TemplateSet",
    # helpers
    "H",
    "helper_map",
]
