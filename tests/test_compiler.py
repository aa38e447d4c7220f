from __future__ import annotations

import atexit

import pytest

import respack.registry
from respack.codec import File
from respack.compiler import compile_files, compile_from, compile_manifest, hexcode
from respack.errors import CompileError
from respack.registry import Registry
from respack.resource import ResourceView


@pytest.fixture
def fresh_registry(monkeypatch):
    registry = Registry()
    exit_calls: list[tuple] = []
    monkeypatch.setattr(respack.registry, "_REGISTRY", registry)
    monkeypatch.setattr(atexit, "register", lambda fn, *args: exit_calls.append((fn, args)))
    return registry, exit_calls


def _run(source: str) -> None:
    exec(compile(source, "<resources>", "exec"), {"__name__": "resources"})


def test_hexcode_rows() -> None:
    rows = hexcode(bytes(range(20)))
    assert len(rows) == 2
    assert rows[0] == '    b"' + "".join(f"\\x{i:02x}" for i in range(15)) + '"'
    assert hexcode(b"") == []


def test_compiled_module_registers_group(fresh_registry) -> None:
    registry, exit_calls = fresh_registry
    source = compile_files(
        "assets",
        "assets",
        [File("shader.vert", b"void main(){}"), File("readme.txt", b"")],
    )

    assert source.startswith("# Compiled resource file. DO NOT EDIT!")
    assert "# shader.vert" in source
    _run(source)

    view = ResourceView("assets", registry=registry)
    assert view.list() == {"shader.vert", "readme.txt"}
    assert bytes(view.get_raw("shader.vert")) == b"void main(){}"
    assert len(view.get_raw("readme.txt")) == 0

    assert len(exit_calls) == 1
    fn, args = exit_calls[0]
    fn(*args)
    assert "assets" not in registry


def test_compiled_module_with_only_empty_files(fresh_registry) -> None:
    registry, _ = fresh_registry
    _run(compile_files("blank", "blank", [File("a", b""), File("b", b"")]))

    view = ResourceView("blank", registry=registry)
    assert view.list() == {"a", "b"}
    assert bytes(view.get_raw("b")) == b""


def test_compiled_module_for_empty_group(fresh_registry) -> None:
    registry, _ = fresh_registry
    source = compile_files("empty", "empty", [])

    assert 'register_data(RESOURCE_GROUP, 0, b"", b"", b"")' in source
    _run(source)
    assert ResourceView("empty", registry=registry).list() == set()


def test_compile_files_validation() -> None:
    with pytest.raises(CompileError):
        compile_files("not a name", "g", [])
    with pytest.raises(CompileError):
        compile_files("res", "", [])
    with pytest.raises(CompileError):
        compile_files("res", "g", [File("a", b"1"), File("a", b"2")])


def test_compile_from_manifest(tmp_path, fresh_registry) -> None:
    registry, _ = fresh_registry
    (tmp_path / "shaders").mkdir()
    (tmp_path / "shaders" / "main.vert").write_bytes(b"void main(){}")
    (tmp_path / "readme.txt").write_bytes(b"")
    manifest = tmp_path / "resources.yaml"
    manifest.write_text(
        "group: assets\n"
        "files:\n"
        "  - {filename: shaders/main.vert, alias: shader.vert}\n"
        "  - readme.txt\n",
        encoding="utf-8",
    )

    _run(compile_from("assets", manifest))

    view = ResourceView("assets", registry=registry)
    assert view.list() == {"shader.vert", "readme.txt"}
    assert view.get_text("shader.vert") == "void main(){}"


def test_compile_from_fails_without_partial_output(tmp_path) -> None:
    manifest = tmp_path / "resources.yaml"
    manifest.write_text("group: assets\nfiles:\n  - missing.txt\n", encoding="utf-8")
    with pytest.raises(CompileError):
        compile_from("assets", manifest)

    no_group = tmp_path / "nogroup.yaml"
    no_group.write_text("files: []\n", encoding="utf-8")
    with pytest.raises(CompileError):
        compile_from("assets", no_group)


def test_compile_manifest_writes_output(tmp_path, fresh_registry) -> None:
    registry, _ = fresh_registry
    (tmp_path / "a.txt").write_bytes(b"alpha")
    manifest = tmp_path / "resources.yaml"
    manifest.write_text("group: assets\nfiles:\n  - a.txt\n", encoding="utf-8")
    output = tmp_path / "assets_resources.py"

    source = compile_manifest("assets", manifest, output)

    assert output.read_text(encoding="utf-8") == source
    _run(source)
    assert ResourceView("assets", registry=registry).get_text("a.txt") == "alpha"


def test_compile_manifest_writes_nothing_on_failure(tmp_path) -> None:
    manifest = tmp_path / "resources.yaml"
    manifest.write_text("files:\n  - a.txt\n", encoding="utf-8")
    (tmp_path / "a.txt").write_bytes(b"alpha")
    output = tmp_path / "out.py"

    with pytest.raises(CompileError):
        compile_manifest("assets", manifest, output)
    assert not output.exists()
