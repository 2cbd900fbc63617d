"""Schema backends and their discovery."""
from tablelink.backends.protocols import BuilderHandle, ColumnFactory, SchemaBackend
from tablelink.backends.discovery import build_backend, discover_backends

__all__ = [
    "BuilderHandle",
    "ColumnFactory",
    "SchemaBackend",
    "build_backend",
    "discover_backends",
]
