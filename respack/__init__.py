from .codec import File, decode, encode
from .compiler import compile_manifest
from .errors import (
    CodecError,
    CompileError,
    LoadError,
    ManifestError,
    NotFoundError,
    ResourceError,
)
from .registry import (
    Manifest,
    Registry,
    get_registry,
    override_group,
    register_data,
    unregister_data,
)
from .resource import ResourceView


__all__ = [
    "CodecError",
    "CompileError",
    "File",
    "LoadError",
    "Manifest",
    "ManifestError",
    "NotFoundError",
    "Registry",
    "ResourceError",
    "ResourceView",
    "compile_manifest",
    "decode",
    "encode",
    "get_registry",
    "override_group",
    "register_data",
    "unregister_data",
]
