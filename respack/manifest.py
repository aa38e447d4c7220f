from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, Union

import yaml

from .errors import ManifestError

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ManifestFile:
    filename: str
    alias: str | None = None

    @property
    def name(self) -> str:
        """The name the file is looked up by."""
        return self.alias if self.alias is not None else self.filename


@dataclass
class ResourceManifest:
    group: str
    files: list[ManifestFile] = field(default_factory=list)
    path: Path | None = None

    @property
    def base_dir(self) -> Path:
        if self.path is None:
            return Path(".")
        return self.path.parent

    def resolve(self, file: ManifestFile) -> Path:
        return self.base_dir / file.filename


class ManifestProvider(Protocol):
    def load(self, path: PathLike) -> ResourceManifest: ...


def coerce_file_entry(entry: Any, index: int) -> ManifestFile:
    if isinstance(entry, str):
        if not entry:
            raise ManifestError(f"File entry {index} has an empty filename")
        return ManifestFile(filename=entry)
    if not isinstance(entry, dict):
        raise ManifestError(
            f"File entry {index} must be a string or mapping, got: {type(entry).__name__}"
        )

    filename = entry.get("filename")
    if not isinstance(filename, str) or not filename:
        raise ManifestError(f"File entry {index} needs a non-empty 'filename'")

    alias = entry.get("alias")
    if alias is not None and (not isinstance(alias, str) or not alias):
        raise ManifestError(f"File entry {index} has an empty or invalid 'alias'")

    unknown = set(entry) - {"filename", "alias"}
    if unknown:
        raise ManifestError(
            f"File entry {index} has invalid keys: {', '.join(sorted(unknown))}"
        )
    return ManifestFile(filename=filename, alias=alias)


def manifest_from_dict(data: Any, path: Path | None = None) -> ResourceManifest:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a mapping")

    # compile_files rejects an empty group; overrides only warn about it
    group = data.get("group")
    if group is None:
        group = ""
    if not isinstance(group, str):
        raise ManifestError("Manifest 'group' must be a string")

    raw_files = data.get("files")
    if raw_files is None:
        raw_files = []
    if not isinstance(raw_files, list):
        raise ManifestError("Manifest 'files' must be a list")

    files = [coerce_file_entry(entry, i) for i, entry in enumerate(raw_files)]
    return ResourceManifest(group=group, files=files, path=path)


class YamlManifestProvider:
    """Reads manifests of the form ``{group: str, files: [...]}`` from YAML."""

    def load(self, path: PathLike) -> ResourceManifest:
        manifest_path = Path(path)
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except UnicodeDecodeError as e:
            raise ManifestError(f"Manifest {manifest_path} is not valid UTF-8: {e}") from e
        except FileNotFoundError as e:
            raise ManifestError(f"Manifest not found: {manifest_path}") from e
        except OSError as e:
            raise ManifestError(f"Cannot read manifest {manifest_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ManifestError(f"Invalid YAML in {manifest_path}: {e}") from e
        return manifest_from_dict(data, path=manifest_path)


def load_manifest(path: PathLike) -> ResourceManifest:
    return YamlManifestProvider().load(path)
