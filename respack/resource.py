from __future__ import annotations

import logging

from .errors import ManifestError, NotFoundError
from .loader import FileLoader
from .manifest import ManifestProvider
from .override import OverrideResolver
from .registry import Registry, get_registry

logger = logging.getLogger(__name__)


class ResourceView:
    """Access to the files of one registered resource group.

    When an override path is set for the group, names declared in the
    override manifest are served from disk instead of the compiled-in data.
    """

    def __init__(
        self,
        group: str,
        *,
        registry: Registry | None = None,
        provider: ManifestProvider | None = None,
        loader: FileLoader | None = None,
    ) -> None:
        self.registry = registry if registry is not None else get_registry()
        self.group = group
        self._manifest = self.registry.lookup_manifest(group)
        self._override: OverrideResolver | None = None

        override_path = self.registry.override_path(group)
        if override_path:
            logger.info(
                "Resource group '%s' overridden with '%s'", group, override_path
            )
            try:
                self._override = OverrideResolver(
                    group, override_path, provider=provider, loader=loader
                )
            except ManifestError as e:
                logger.warning(
                    "Ignoring override of resource group '%s': %s", group, e
                )

    @property
    def override_active(self) -> bool:
        return self._override is not None

    def list(self) -> set[str]:
        return self._manifest.names()

    def get_raw(self, filename: str) -> memoryview:
        if self._override is not None:
            data = self._override.get(filename)
            if data is not None:
                return data

        data = self._manifest.get(filename)
        if data is None:
            raise NotFoundError(
                f"File '{filename}' was not found in resource group '{self.group}'"
            )
        return data

    def get_text(self, filename: str, encoding: str = "utf-8") -> str:
        return bytes(self.get_raw(filename)).decode(encoding)
