"""
Input format adapters.

Each subpackage implements ``DomainParser`` for one document format.
"""

from .openapi import OpenAPIParser
from .protobuf import ProtobufParser

__all__ = ["OpenAPIParser", "ProtobufParser"]
