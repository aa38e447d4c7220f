"""Render resource groups as importable Python modules.

A compiled module holds the three encoded buffers as bytes literals. Importing
it registers the group with the process-wide registry; the group is
unregistered again at interpreter exit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .codec import OFFSET_SIZE, File, encode
from .errors import CodecError, CompileError, LoadError, ManifestError
from .loader import DiskFileLoader, FileLoader
from .manifest import ManifestProvider, PathLike, ResourceManifest, YamlManifestProvider

logger = logging.getLogger(__name__)

BYTES_PER_ROW = 15
HEADER = "# Compiled resource file. DO NOT EDIT!\n"


def hexcode(data: bytes, indent: str = "    ") -> list[str]:
    rows = []
    for start in range(0, len(data), BYTES_PER_ROW):
        chunk = data[start : start + BYTES_PER_ROW]
        rows.append(indent + 'b"' + "".join(f"\\x{b:02x}" for b in chunk) + '"')
    return rows


def comment(text: str, indent: str = "    ") -> str:
    return f"{indent}# {' '.join(text.splitlines())}"


def _render_buffer(variable: str, segments: list[tuple[str, bytes]]) -> str:
    if not any(chunk for _, chunk in segments):
        return f'{variable} = b""\n'

    lines = [f"{variable} = ("]
    for label, chunk in segments:
        lines.append(comment(label))
        lines.extend(hexcode(chunk))
    lines.append(")")
    return "\n".join(lines) + "\n"


def _split(files: Sequence[File], offsets: bytes, names: bytes, data: bytes):
    pair = 2 * OFFSET_SIZE
    positions, filenames, contents = [], [], []
    name_pos = data_pos = 0
    for i, file in enumerate(files):
        raw_name = file.name.encode("utf-8")
        positions.append((file.name, offsets[i * pair : (i + 1) * pair]))
        filenames.append((file.name, names[name_pos : name_pos + len(raw_name)]))
        contents.append((file.name, data[data_pos : data_pos + len(file.content)]))
        name_pos += len(raw_name)
        data_pos += len(file.content)
    return positions, filenames, contents


def compile_files(name: str, group: str, files: Sequence[File]) -> str:
    """Return the source of a module registering ``files`` under ``group``."""
    if not name or not name.isidentifier():
        raise CompileError(f"Resource module name must be an identifier: {name!r}")
    if not group:
        raise CompileError("Group name is not specified")

    try:
        offsets, names, data = encode(files)
    except CodecError as e:
        raise CompileError(str(e)) from e

    out = [
        HEADER,
        f"# Resource module {name!r} for group {group!r}\n",
        "\n",
        "import atexit\n",
        "\n",
        "from respack import register_data, unregister_data\n",
        "\n",
        f"RESOURCE_GROUP = {group!r}\n",
        "\n",
    ]

    if files:
        positions, filenames, contents = _split(files, offsets, names, data)
        out.append(_render_buffer("_positions", positions))
        out.append("\n")
        out.append(_render_buffer("_filenames", filenames))
        out.append("\n")
        out.append(_render_buffer("_data", contents))
        out.append("\n")
        out.append(
            f"register_data(RESOURCE_GROUP, {len(files)}, _positions, _filenames, _data)\n"
        )
    else:
        out.append('register_data(RESOURCE_GROUP, 0, b"", b"", b"")\n')

    out.append("atexit.register(unregister_data, RESOURCE_GROUP)\n")
    return "".join(out)


def resolve_files(
    manifest: ResourceManifest, loader: FileLoader | None = None
) -> list[File]:
    """Load every file listed in ``manifest``, keyed by its alias."""
    loader = loader or DiskFileLoader()
    files: list[File] = []
    total = len(manifest.files)
    for index, entry in enumerate(manifest.files, start=1):
        logger.debug(
            "Reading file %d of %d in group '%s'", index, total, manifest.group
        )
        if entry.alias is not None and entry.alias != entry.filename:
            logger.debug("    %s -> %s", entry.filename, entry.alias)
        else:
            logger.debug("    %s", entry.filename)
        try:
            content = loader.read(manifest.resolve(entry))
        except LoadError as e:
            raise CompileError(str(e)) from e
        files.append(File(name=entry.name, content=bytes(content)))
    return files


def compile_from(
    name: str,
    manifest_path: PathLike,
    *,
    provider: ManifestProvider | None = None,
    loader: FileLoader | None = None,
) -> str:
    try:
        manifest = (provider or YamlManifestProvider()).load(manifest_path)
    except ManifestError as e:
        raise CompileError(str(e)) from e
    return compile_files(name, manifest.group, resolve_files(manifest, loader))


def compile_manifest(
    name: str, manifest_path: PathLike, output: PathLike | None = None
) -> str:
    """Compile a YAML resource manifest, writing the module to ``output`` if given.

    Nothing is written when compiling fails.
    """
    source = compile_from(name, manifest_path)
    if output is not None:
        with open(output, "w", encoding="utf-8") as f:
            f.write(source)
    return source
