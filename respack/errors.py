class ResourceError(Exception):
    """Base class for respack errors."""


class NotFoundError(ResourceError, LookupError):
    """Unknown group or filename; indicates a packaging or coding mistake."""


class LoadError(ResourceError, OSError):
    """A file listed for loading could not be read."""


class ManifestError(ResourceError, ValueError):
    """A resource manifest is unreadable or malformed."""


class CodecError(ResourceError, ValueError):
    """Invalid input to the encoder or corrupt encoded buffers."""


class CompileError(ResourceError):
    """Compiling a resource group failed; no output was produced."""
