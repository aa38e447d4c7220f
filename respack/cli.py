import logging
import sys

import click

from .compiler import compile_manifest, resolve_files
from .errors import CompileError, ManifestError
from .manifest import load_manifest


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
def cli(verbose):
    """Embed files into Python modules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("compile")
@click.argument("name")
@click.argument("manifest", type=click.Path(dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
def compile_cmd(name, manifest, output):
    """
    Compile the files listed in MANIFEST into a module named NAME.
    Writes to OUTPUT, or stdout when OUTPUT is omitted.
    """
    try:
        source = compile_manifest(name, manifest, output)
    except CompileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output:
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(source, nl=False)


@cli.command("check")
@click.argument("manifest", type=click.Path(dir_okay=False))
def check_cmd(manifest):
    """List what MANIFEST would embed without writing anything."""
    try:
        parsed = load_manifest(manifest)
        if not parsed.group:
            raise CompileError("Group name is not specified")
        files = resolve_files(parsed)
    except (CompileError, ManifestError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"group: {parsed.group}")
    total = 0
    for entry, file in zip(parsed.files, files):
        total += len(file.content)
        target = entry.filename
        if entry.alias is not None and entry.alias != entry.filename:
            target = f"{entry.filename} -> {entry.alias}"
        click.echo(f"  {target} ({len(file.content)} bytes)")
    click.echo(f"{len(files)} file(s), {total} bytes")


def main():
    cli()


if __name__ == "__main__":
    main()
