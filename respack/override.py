"""Live override of a compiled-in resource group by files on disk."""

from __future__ import annotations

import logging

from .loader import DiskFileLoader, FileLoader
from .manifest import ManifestProvider, PathLike, YamlManifestProvider

logger = logging.getLogger(__name__)


class OverrideResolver:
    """Resolves names of one group against an external manifest.

    The manifest is parsed once, on construction. Loaded files are cached for
    the lifetime of the resolver and never evicted. Lookups of uncached names
    scan the declared files in order, so the first file whose alias (or
    filename, when it has no alias) matches wins.
    """

    def __init__(
        self,
        group: str,
        manifest_path: PathLike,
        *,
        provider: ManifestProvider | None = None,
        loader: FileLoader | None = None,
    ) -> None:
        self.group = group
        self.manifest_path = str(manifest_path)
        self.loader = loader or DiskFileLoader()
        self.manifest = (provider or YamlManifestProvider()).load(manifest_path)
        self.cache: dict[str, bytes] = {}

        if self.manifest.group != group:
            logger.warning(
                "Resource group '%s' overridden with different group, found '%s' "
                "but expected '%s'",
                group,
                self.manifest.group,
                group,
            )

    @property
    def external_group(self) -> str:
        return self.manifest.group

    def get(self, name: str) -> memoryview | None:
        """Return the overriding contents of ``name``, or None on a miss.

        Raises LoadError when ``name`` is declared but its file can't be read.
        """
        cached = self.cache.get(name)
        if cached is not None:
            return memoryview(cached)

        for file in self.manifest.files:
            if file.name != name:
                continue
            data = bytes(self.loader.read(self.manifest.resolve(file)))
            self.cache[name] = data
            return memoryview(data)

        logger.warning(
            "File '%s' was not found in overridden group '%s', falling back to "
            "compiled-in resources",
            name,
            self.group,
        )
        return None
