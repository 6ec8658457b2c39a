"""Registry layer — persisted component metadata and runtime resolution."""

from pagehydra.registry.metadata import (
    MetadataRegistry,
    RegistryEntry,
    dump_metadata,
    load_metadata,
    parse_metadata,
)
from pagehydra.registry.resolver import ComponentResolver

__all__ = [
    "ComponentResolver",
    "MetadataRegistry",
    "RegistryEntry",
    "dump_metadata",
    "load_metadata",
    "parse_metadata",
]
