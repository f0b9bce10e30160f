"""
Go-specific naming utilities.

Keeps generated parameter and receiver names clear of Go keywords and
predeclared identifiers.
"""

from ...core.naming import NameSanitizer, NamingCase


GO_RESERVED_WORDS = {
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
}

GO_BUILTIN_TYPES = {
    "bool", "byte", "complex64", "complex128", "error", "float32", "float64",
    "int", "int8", "int16", "int32", "int64", "rune", "string", "uint",
    "uint8", "uint16", "uint32", "uint64", "uintptr", "append", "cap",
    "close", "complex", "copy", "delete", "imag", "len", "make", "new",
    "panic", "print", "println", "real", "recover",
}


def create_go_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Go."""
    return NameSanitizer(GO_RESERVED_WORDS, GO_BUILTIN_TYPES)


_sanitizer = create_go_sanitizer()


def param_name(name: str) -> str:
    """camelCase Go parameter name that never shadows a keyword."""
    return _sanitizer.sanitize_name(name, NamingCase.CAMEL_CASE)


def receiver_name(type_name: str) -> str:
    """Single-letter method receiver for a type."""
    return type_name[:1].lower() or "x"
