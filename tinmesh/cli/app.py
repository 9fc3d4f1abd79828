#!/usr/bin/env python3
"""tinmesh Command-Line Interface"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from tinmesh import __version__
from tinmesh.benchmark import FIELD_KINDS, run_benchmark
from tinmesh.config import TriangulationConfig
from tinmesh.core.heightfield import HeightField
from tinmesh.exceptions import TinMeshException
from tinmesh.export import write_obj
from tinmesh.io import load_heights
from tinmesh.triangulation import Triangulator
from tinmesh.cli.config import load_config, set_config_value, reset_config, get_config_path
from tinmesh.cli.ui import console, print_error, print_success, print_table, print_warning, setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="tinmesh Command Line Interface - Greedy Delaunay TIN generation from height grids",
    add_completion=False
)


def _load_field(input_file: Path, width: Optional[int], height: Optional[int]) -> HeightField:
    samples, w, h = load_heights(str(input_file), width, height)
    return HeightField(samples, w, h)


def _run(field: HeightField, config: TriangulationConfig, quiet: bool = False):
    """Triangulate with a progress bar; returns (points, triangles, stats)."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=quiet,
    ) as progress:
        task = progress.add_task("Triangulating", total=1.0)
        triangulator = Triangulator(
            field,
            config,
            progress_callback=lambda value: progress.update(task, completed=value)
        )
        points, triangles = triangulator.run()
    return points, triangles, triangulator.get_statistics()


def _setting_float(key: str, override: Optional[float]) -> float:
    """Command-line value if given, else the user config value as a float."""
    if override is not None:
        return override
    value = load_config()[key]
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Configuration value {key}={value!r} is not a number") from None


def _build_config(
    max_error: Optional[float],
    max_vertices: Optional[int],
    max_triangles: Optional[int]
) -> TriangulationConfig:
    config = TriangulationConfig(
        max_error=_setting_float("max_error", max_error),
        max_vertices=max_vertices,
        max_triangles=max_triangles,
    )
    logger.debug(f"Triangulation settings: {config.as_dict()}")
    return config


@app.command("triangulate")
def triangulate_command(
    input_file: Path = typer.Argument(..., help="Height data (.json, .npy or image)", exists=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output OBJ file"),
    max_error: Optional[float] = typer.Option(None, "--max-error", "-e", help="Maximum vertical error"),
    width: Optional[int] = typer.Option(None, "--width", help="Grid width for flat data"),
    height: Optional[int] = typer.Option(None, "--height", help="Grid height for flat data"),
    max_vertices: Optional[int] = typer.Option(None, "--max-vertices", help="Stop after this many vertices"),
    max_triangles: Optional[int] = typer.Option(None, "--max-triangles", help="Stop before exceeding this many triangles"),
    z_scale: Optional[float] = typer.Option(None, "--z-scale", help="Height scale factor for the OBJ output"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Also save a PNG of the mesh"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Triangulate a height grid and write the mesh as OBJ."""
    setup_logging(verbose)
    try:
        field = _load_field(input_file, width, height)
        config = _build_config(max_error, max_vertices, max_triangles)
        scale = _setting_float("z_scale", z_scale)
        points, triangles, stats = _run(field, config, quiet=verbose)

        if output is None:
            output_dir = load_config()["output_dir"]
            output = Path(output_dir) / f"{input_file.stem}.obj"
        written = write_obj(str(output), points, triangles, field, scale)

        if plot is not None:
            from tinmesh.plotting import plot_mesh
            plot_mesh(points, triangles, field.width, field.height, filename=str(plot), field=field)
    except (TinMeshException, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_table(stats, "Triangulation Statistics")
    if not stats["converged"]:
        print_warning(f"Stopped by a size cap before reaching max_error={config.max_error}")
    print_success(f"Mesh written to [path]{written}[/path]")


@app.command("plot")
def plot_command(
    input_file: Path = typer.Argument(..., help="Height data (.json, .npy or image)", exists=True),
    output: Path = typer.Argument(..., help="Output image file"),
    max_error: Optional[float] = typer.Option(None, "--max-error", "-e", help="Maximum vertical error"),
    width: Optional[int] = typer.Option(None, "--width", help="Grid width for flat data"),
    height: Optional[int] = typer.Option(None, "--height", help="Grid height for flat data"),
    background: bool = typer.Option(True, "--background/--no-background", help="Draw the height field under the mesh"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Triangulate a height grid and render the mesh to an image."""
    from tinmesh.plotting import plot_mesh

    setup_logging(verbose)
    settings = load_config()
    try:
        field = _load_field(input_file, width, height)
        config = _build_config(max_error, None, None)
        points, triangles, _ = _run(field, config, quiet=verbose)
        plot_mesh(
            points,
            triangles,
            field.width,
            field.height,
            filename=str(output),
            field=field if background else None,
            colormap=settings["colormap"],
            dpi=settings["dpi"],
        )
    except (TinMeshException, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_success(f"Plot saved to [path]{output}[/path]")


@app.command("bench")
def bench_command(
    width: int = typer.Option(256, "--width", min=2, help="Synthetic grid width"),
    height: int = typer.Option(256, "--height", min=2, help="Synthetic grid height"),
    max_error: float = typer.Option(1.0, "--max-error", "-e", min=0.0, help="Maximum vertical error"),
    kind: str = typer.Option("waves", "--kind", help=f"Synthetic field: {', '.join(FIELD_KINDS)}"),
    repeat: int = typer.Option(3, "--repeat", min=1, help="Number of timed runs"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Time the triangulation on a synthetic height field."""
    setup_logging(verbose)
    try:
        result = run_benchmark(width, height, max_error, kind=kind, repeat=repeat)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_table(result, "Benchmark")


@app.command("info")
def info_command(
    input_file: Path = typer.Argument(..., help="Height data (.json, .npy or image)", exists=True),
    width: Optional[int] = typer.Option(None, "--width", help="Grid width for flat data"),
    height: Optional[int] = typer.Option(None, "--height", help="Grid height for flat data"),
):
    """Show a summary of a height data file."""
    try:
        field = _load_field(input_file, width, height)
    except TinMeshException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_table(field.stats(), f"{input_file.name}")


@app.command("version")
def version_command():
    """Show tinmesh version."""
    console.print(f"tinmesh {__version__}")


config_app = typer.Typer(help="Manage tinmesh configuration")
app.add_typer(config_app, name="config")


def _convert_value(value: str):
    """Auto-convert a command-line string to bool, int or float where possible."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            pass
    return value


@config_app.command("show")
def config_show():
    """Display current configuration settings."""
    config = load_config()
    console.print(Panel.fit(f"[bold]tinmesh Configuration[/bold]\n{get_config_path()}"))
    for key, value in sorted(config.items()):
        console.print(f"[key]{key}[/key]: [value]{value}[/value]")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Configuration value")
):
    """Set a configuration value."""
    typed_value = _convert_value(value)
    set_config_value(key, typed_value)
    print_success(f"Configuration updated: {key} = {typed_value}")


@config_app.command("reset")
def config_reset():
    """Reset configuration to default values."""
    reset_config()
    print_success("Configuration reset to default values")


def main():
    """Run the tinmesh CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[warning]Operation cancelled by user[/warning]")
        sys.exit(1)


if __name__ == "__main__":
    main()
