"""Generate domain-driven Go scaffolding from OpenAPI and Protocol Buffers."""

__version__ = "0.1.0"
