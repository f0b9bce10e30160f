"""
Go target language.

Canonical type mapping, struct tag rendering and identifier rules used by
the Go template library.
"""

from .naming import create_go_sanitizer, param_name, receiver_name
from .types import GoType, go_imports, go_type, struct_tags, zero_value

__all__ = [
    "GoType",
    "go_type",
    "go_imports",
    "struct_tags",
    "zero_value",
    "create_go_sanitizer",
    "param_name",
    "receiver_name",
]
