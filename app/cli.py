from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from adapters.filesystem.diagram_repository import FileSystemDiagramRepository
from adapters.sharing.lz_codec import (
    build_share_link,
    check_size_budget,
    compare_compression,
    ensure_link_length,
    parse_share_link,
)
from app.config import AppSettings, is_absolute_url, load_settings
from domain.errors import GenerationError, ShareLinkTooLongError
from domain.models import Diagram, Number
from domain.services.detect_format import detect_format
from domain.services.edit_diagram import move_group, move_node, rescale_zoom
from domain.services.export_diagram import EXPORT_FORMAT_ERASER, EXPORT_FORMATS, export_diagram
from domain.services.hierarchy import auto_fit
from domain.services.import_diagram import import_text

app = typer.Typer(no_args_is_help=True)
console = Console()


def _settings(ctx: typer.Context) -> AppSettings:
    settings = ctx.obj
    if not isinstance(settings, AppSettings):
        settings = load_settings()
        ctx.obj = settings
    return settings


def _load_diagram(path: Path) -> Diagram:
    if not path.exists():
        console.print(f"[red]File not found:[/] {path}")
        raise typer.Exit(code=1)
    try:
        return FileSystemDiagramRepository().load(path)
    except (ValidationError, TypeError, ValueError) as exc:
        console.print(f"[red]Invalid diagram file:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _write_or_print(text: str, output: Optional[Path]) -> None:
    if output is None:
        console.print(text, markup=False, highlight=False, soft_wrap=True)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote[/] {output}")


def _save_diagram(diagram: Diagram, output: Path) -> None:
    FileSystemDiagramRepository().save(diagram, output)
    console.print(
        f"[green]Wrote[/] {output} "
        f"({len(diagram.nodes)} services, {len(diagram.groups)} containers, "
        f"{len(diagram.connections)} connections)"
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    try:
        ctx.obj = load_settings(config)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Failed to load settings:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("share")
def share(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    base_url: Optional[str] = typer.Option(None, help="Override the configured base URL."),
) -> None:
    settings = _settings(ctx).share
    diagram = _load_diagram(input_path)
    try:
        url = build_share_link(diagram, base_url or settings.base_url)
        ensure_link_length(url, settings.max_url_length)
    except ShareLinkTooLongError as exc:
        console.print(f"[red]Diagram is too large to share:[/] {exc}")
        raise typer.Exit(code=1) from exc
    except GenerationError as exc:
        console.print(f"[red]Share link generation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    report = check_size_budget(diagram, settings.max_size_kb)
    console.print(url, markup=False, highlight=False, soft_wrap=True)
    console.print(f"[dim]{report.message}; URL length {len(url)}/{settings.max_url_length}[/]")


@app.command("open")
def open_link(
    url: str = typer.Argument(..., help="Share link containing a data parameter."),
    output: Path = typer.Option(Path("diagram.json"), help="Where to write the diagram."),
) -> None:
    if not is_absolute_url(url):
        console.print(f"[red]Not an absolute http(s) URL:[/] {url}")
        raise typer.Exit(code=1)
    diagram = parse_share_link(url)
    if diagram is None:
        console.print("[yellow]No diagram data found in link[/]")
        raise typer.Exit(code=1)
    _save_diagram(diagram, output)


@app.command("import")
def import_command(
    input_path: Path = typer.Argument(..., help="Text file with JSON or Eraser-style DSL."),
    output: Path = typer.Option(Path("diagram.json"), help="Where to write the diagram."),
) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    diagram = import_text(input_path.read_text(encoding="utf-8"))
    if diagram is None:
        console.print("[red]Unknown format.[/] Paste JSON or Eraser-style diagram text.")
        raise typer.Exit(code=1)
    _save_diagram(diagram, output)


@app.command("export")
def export_command(
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    fmt: str = typer.Option(EXPORT_FORMAT_ERASER, "--format", help="eraser or flowchart."),
    output: Optional[Path] = typer.Option(None, help="Write to a file instead of stdout."),
) -> None:
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Unsupported format:[/] {fmt}")
        raise typer.Exit(code=1)
    _write_or_print(export_diagram(_load_diagram(input_path), fmt), output)


@app.command("detect")
def detect(input_path: Path = typer.Argument(..., help="Text file to inspect.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    console.print(detect_format(input_path.read_text(encoding="utf-8")))


@app.command("size")
def size(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    max_kb: Optional[float] = typer.Option(None, "--max-kb", help="Compressed size ceiling."),
) -> None:
    diagram = _load_diagram(input_path)
    limit = max_kb if max_kb is not None else _settings(ctx).share.max_size_kb
    report = check_size_budget(diagram, limit)
    stats = compare_compression(diagram)

    table = Table(title=str(input_path))
    table.add_column("Encoding")
    table.add_column("Characters", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_row("JSON", str(stats.original), "100.0%")
    table.add_row("LZ-string", str(stats.lz_string), f"{stats.lz_string_ratio:.1f}%")
    table.add_row("Base64 (legacy)", str(stats.base64), f"{stats.base64_ratio:.1f}%")
    console.print(table)

    color = "green" if report.within_budget else "red"
    console.print(f"[{color}]{report.message}[/]")
    if not report.within_budget:
        raise typer.Exit(code=1)


@app.command("list")
def list_diagrams(
    ctx: typer.Context,
    directory: Path = typer.Argument(..., help="Directory with diagram JSON files."),
) -> None:
    if not directory.is_dir():
        console.print(f"[red]Directory not found:[/] {directory}")
        raise typer.Exit(code=1)
    try:
        entries = FileSystemDiagramRepository().load_all_with_paths(directory)
    except (ValidationError, TypeError, ValueError) as exc:
        console.print(f"[red]Invalid diagram file:[/] {exc}")
        raise typer.Exit(code=1) from exc

    limit = _settings(ctx).share.max_size_kb
    table = Table(title=str(directory))
    table.add_column("File")
    table.add_column("Services", justify="right")
    table.add_column("Containers", justify="right")
    table.add_column("Connections", justify="right")
    table.add_column("Share size", justify="right")
    for path, diagram in entries:
        report = check_size_budget(diagram, limit)
        size_text = f"{report.compressed_size_kb:.2f}KB"
        table.add_row(
            path.name,
            str(len(diagram.nodes)),
            str(len(diagram.groups)),
            str(len(diagram.connections)),
            size_text if report.within_budget else f"[red]{size_text}[/]",
        )
    console.print(table)


@app.command("move")
def move_command(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    item_id: str = typer.Argument(..., help="Service or container id."),
    x: float = typer.Argument(..., help="New x coordinate."),
    y: float = typer.Argument(..., help="New y coordinate."),
    output: Optional[Path] = typer.Option(None, help="Defaults to the input file."),
) -> None:
    canvas = _settings(ctx).canvas
    diagram = _load_diagram(input_path)
    new_x, new_y = _coordinate(x), _coordinate(y)
    if diagram.node_by_id(item_id) is not None:
        mover = move_node
    elif diagram.group_by_id(item_id) is not None:
        mover = move_group
    else:
        console.print(f"[red]No service or container with id:[/] {item_id}")
        raise typer.Exit(code=1)

    updated = mover(
        diagram,
        item_id,
        new_x,
        new_y,
        item_size=canvas.item_size,
        grid_size=canvas.grid_size,
        snap=canvas.snap_to_grid,
    )
    if updated is diagram:
        console.print(f"[red]Moving {item_id} there would nest it inside itself[/]")
        raise typer.Exit(code=1)
    _save_diagram(updated, output or input_path)


@app.command("fit")
def fit(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    group_id: str = typer.Argument(..., help="Container to grow around its services."),
    output: Optional[Path] = typer.Option(None, help="Defaults to the input file."),
) -> None:
    canvas = _settings(ctx).canvas
    diagram = _load_diagram(input_path)
    if diagram.group_by_id(group_id) is None:
        console.print(f"[red]No container with id:[/] {group_id}")
        raise typer.Exit(code=1)
    updated = auto_fit(
        diagram,
        group_id,
        item_size=canvas.item_size,
        grid_size=canvas.grid_size,
        snap=canvas.snap_to_grid,
    )
    _save_diagram(updated, output or input_path)


@app.command("zoom")
def zoom(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Diagram JSON file."),
    level: Optional[int] = typer.Argument(None, help="Zoom level in percent."),
    output: Optional[Path] = typer.Option(None, help="Defaults to the input file."),
) -> None:
    target = level if level is not None else _settings(ctx).canvas.default_zoom_level
    if target <= 0:
        console.print(f"[red]Zoom level must be positive:[/] {target}")
        raise typer.Exit(code=1)
    _save_diagram(rescale_zoom(_load_diagram(input_path), target), output or input_path)


def _coordinate(value: float) -> Number:
    return int(value) if value.is_integer() else value


if __name__ == "__main__":
    app()
