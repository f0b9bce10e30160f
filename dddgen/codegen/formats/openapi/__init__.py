"""
OpenAPI input format.

Turns aggregate-marked OpenAPI schemas into canonical entities.
"""

from .parser import OpenAPIParser

__all__ = ["OpenAPIParser"]
