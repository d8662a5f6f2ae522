"""Utility modules for counsel_ai."""

from .json_parsing import parse_json_object, strip_code_fence
from .text import preview

__all__ = [
    "parse_json_object",
    "preview",
    "strip_code_fence",
]
