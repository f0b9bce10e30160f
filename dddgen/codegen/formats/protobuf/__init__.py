"""
Protocol Buffers input format.

Turns top-level messages of a .proto file into canonical entities.
"""

from .parser import ProtobufParser

__all__ = ["ProtobufParser"]
