from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .codec import decode
from .errors import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Manifest:
    group: str
    entries: Mapping[str, memoryview] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> set[str]:
        return set(self.entries)

    def get(self, name: str) -> memoryview | None:
        return self.entries.get(name)


class Registry:
    """Compiled-in resource groups and their optional override manifests.

    Not synchronized: registration, unregistration and override setup are
    expected to happen at startup and shutdown, without concurrent readers.
    """

    def __init__(self) -> None:
        self._groups: dict[str, Manifest] = {}
        self._overrides: dict[str, str | None] = {}

    def __contains__(self, group: object) -> bool:
        return group in self._groups

    def groups(self) -> list[str]:
        return list(self._groups)

    def register(
        self,
        group: str,
        count: int,
        offsets: bytes | None,
        names: bytes | None,
        data: bytes | None,
    ) -> None:
        # first registration wins
        if group in self._groups:
            logger.debug("Resource group '%s' is already registered", group)
            return

        entries: dict[str, memoryview] = {}
        for name, view in decode(count, offsets, names, data):
            entries.setdefault(name, view)

        self._groups[group] = Manifest(group=group, entries=MappingProxyType(entries))
        self._overrides[group] = None
        logger.debug("Registered resource group '%s' with %d file(s)", group, count)

    def unregister(self, group: str) -> None:
        if group not in self._groups:
            raise NotFoundError(f"Resource group '{group}' is not registered")
        del self._groups[group]
        self._overrides.pop(group, None)
        logger.debug("Unregistered resource group '%s'", group)

    def set_override_path(self, group: str, path: str) -> None:
        if group not in self._groups:
            raise NotFoundError(f"Resource group '{group}' was not found")
        self._overrides[group] = str(path)

    def override_path(self, group: str) -> str | None:
        return self._overrides.get(group)

    def lookup_manifest(self, group: str) -> Manifest:
        try:
            return self._groups[group]
        except KeyError:
            raise NotFoundError(f"Resource group '{group}' was not found") from None


_REGISTRY = Registry()


def get_registry() -> Registry:
    return _REGISTRY


def register_data(
    group: str,
    count: int,
    offsets: bytes | None,
    names: bytes | None,
    data: bytes | None,
) -> None:
    get_registry().register(group, count, offsets, names, data)


def unregister_data(group: str) -> None:
    get_registry().unregister(group)


def override_group(group: str, path: str) -> None:
    get_registry().set_override_path(group, path)
