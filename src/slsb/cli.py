"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from slsb.errors import NothingSelectedError, SceneBuilderError

if TYPE_CHECKING:
    from slsb.models import Package

app = typer.Typer(
    name="slsb",
    help="Compile animation scene packages into registry files and FNIS lists.",
    no_args_is_help=True,
)


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(1)


def _load(project_path: Path) -> Package:
    from slsb.models import Package

    try:
        return Package.load(project_path)
    except SceneBuilderError as e:
        raise _fail(e) from None


@app.command()
def create(
    name: Annotated[str, typer.Argument(help="Project name")],
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Project directory"),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option("--author", "-a", help="Author name"),
    ] = None,
) -> None:
    """Create a new, empty project."""
    from slsb.config import load_config
    from slsb.models import PROJECT_SUFFIX, Package

    config = load_config()
    package = Package(name=name, author=author or config.default_author)
    target = (directory or config.projects_dir) / f"{name}{PROJECT_SUFFIX}"
    try:
        save_path = package.save(target)
    except SceneBuilderError as e:
        raise _fail(e) from None
    typer.echo(f"Created project '{name}' at {save_path}")


@app.command()
def convert(
    legacy_path: Annotated[Path, typer.Argument(help="Legacy SLAL JSON file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Project file or directory to write"),
    ] = None,
) -> None:
    """Convert a legacy animation list into a project."""
    from slsb.config import load_config
    from slsb.pipeline.legacy import import_legacy_file

    config = load_config()
    try:
        package = import_legacy_file(legacy_path)
        save_path = package.save(output or config.projects_dir)
    except SceneBuilderError as e:
        raise _fail(e) from None
    typer.echo(f"Converted {len(package.scenes)} animations into {save_path}")


@app.command()
def offsets(
    project_path: Annotated[Path, typer.Argument(help="Project file")],
    offsets_path: Annotated[Path, typer.Argument(help="Offset YAML file")],
) -> None:
    """Import stage offsets into a project and save it."""
    from slsb.pipeline.offsets import import_offsets_file

    package = _load(project_path)
    try:
        count = import_offsets_file(package, offsets_path)
        package.save()
    except SceneBuilderError as e:
        raise _fail(e) from None
    typer.echo(f"Imported offsets for {count} scene{'s' if count != 1 else ''}")


@app.command()
def scenes(
    project_path: Annotated[Path, typer.Argument(help="Project file")],
) -> None:
    """List the scenes of a project."""
    package = _load(project_path)
    typer.echo(f"{package.name} by {package.author} (prefix {package.prefix})")
    for scene_id in sorted(package.scenes):
        scene = package.scenes[scene_id]
        state = "included" if scene.is_exportable else "excluded"
        typer.echo(f"  {scene_id}  {scene.name}  stages={len(scene.stages)}  {state}")


@app.command()
def build(
    project_path: Annotated[Path, typer.Argument(help="Project file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Export root directory"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate the build without writing files"),
    ] = False,
) -> None:
    """Compile a project into its registry file and FNIS lists."""
    from slsb.config import load_config

    config = load_config()
    package = _load(project_path)
    root = output or config.build.output_dir
    if root is None:
        raise _fail(NothingSelectedError("No path to export project to"))

    if dry_run:
        from slsb.pipeline.export import validate_build

        result = validate_build(package, root, app_config=config)
        typer.echo("Dry run: build validation")
        for check in result.checks:
            symbol = "✓" if check.passed else "✗"
            typer.echo(f"  {symbol} {check.label}")
            if not check.passed and check.message:
                typer.echo(f"    {check.message}")
        typer.echo(f"Build would write to: {result.output_dir}/")
        typer.echo(f"Estimated files: {result.estimated_files}")
        if not result.valid:
            raise typer.Exit(1)
    else:
        from slsb.pipeline.export import build_package

        try:
            result = build_package(package, root, app_config=config)
        except (SceneBuilderError, OSError) as e:
            raise _fail(e) from None
        typer.echo(f"Compiled {package.output_name} into {root} ({len(result.files)} files)")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log progress to stderr")
    ] = False,
) -> None:
    """slsb - animation scene package compiler."""
    if version:
        from slsb import __version__

        typer.echo(f"slsb {__version__}")
        raise typer.Exit()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
