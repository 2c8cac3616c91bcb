"""
CLI interface using Click.

Diagnostic front end: lists displays and runs captures, printing a
summary of each result. Nothing is written to disk.
"""

import asyncio
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from screen_capture import __version__
from screen_capture.capture import ScreenCapture
from screen_capture.compositor import PixelBuffer
from screen_capture.config import ConfigurationError, load_config
from screen_capture.displays import find_display, visible_rect
from screen_capture.geometry import Rect
from screen_capture.logging import setup_logging, get_logger

console = Console()
logger = get_logger(__name__)


def _print_buffer(title: str, buffer: Optional[PixelBuffer]) -> None:
    if buffer is None:
        console.print(f"[yellow]{title}: nothing captured[/yellow]")
        sys.exit(1)

    console.print(Panel(
        f"Size: {buffer.width}x{buffer.height}\n"
        f"Channel order: {buffer.channel_order.value}\n"
        f"Bits per pixel: {buffer.bits_per_pixel}\n"
        f"Bytes: {len(buffer.data)}",
        title=title,
    ))


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(), help="Path to config file")
@click.pass_context
def main(ctx: click.Context, version: bool, verbose: bool, config: Optional[str]) -> None:
    """screen-capture - coordinate-correct multi-display screen capture."""
    if version:
        console.print(f"screen-capture v{__version__}")
        sys.exit(0)

    try:
        capture_config = load_config(config)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    level = "DEBUG" if verbose else capture_config.logging.level
    setup_logging(level=level, log_file=capture_config.logging.log_path)

    ctx.ensure_object(dict)
    ctx.obj["capture"] = ScreenCapture(config=capture_config)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@main.command()
@click.pass_context
def displays(ctx: click.Context) -> None:
    """List enumerated displays."""
    capture: ScreenCapture = ctx.obj["capture"]
    all_displays = asyncio.run(capture.get_all_displays())

    if not all_displays:
        console.print("[yellow]No displays found[/yellow]")
        return

    primary_id = capture.config.displays.primary_display_id
    table = Table(title="Displays")
    table.add_column("ID", style="cyan")
    table.add_column("Bounds")
    table.add_column("Visible")
    table.add_column("Scale")

    for d in all_displays:
        label = f"{d.id} (primary)" if d.id == primary_id else d.id
        table.add_row(
            label,
            d.bounds.to_log(),
            visible_rect(d).to_log(),
            f"{d.scale_factor:.2f}",
        )

    console.print(table)


@main.command()
@click.option("--display", "-d", "display_id", default=None, help="Display id")
@click.pass_context
def grab(ctx: click.Context, display_id: Optional[str]) -> None:
    """Capture an entire display."""
    capture: ScreenCapture = ctx.obj["capture"]
    buffer = asyncio.run(capture.capture_entire_screen(display_id))
    _print_buffer(f"Display {display_id or 'primary'}", buffer)


@main.command()
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.argument("width", type=float)
@click.argument("height", type=float)
@click.option("--display", "-d", "display_id", default=None, help="Clip against this display")
@click.pass_context
def area(
    ctx: click.Context,
    x: float,
    y: float,
    width: float,
    height: float,
    display_id: Optional[str],
) -> None:
    """Capture a screen rectangle."""
    capture: ScreenCapture = ctx.obj["capture"]

    target = None
    if display_id is not None:
        target = find_display(asyncio.run(capture.get_all_displays()), display_id)
        if target is None:
            console.print(f"[red]Unknown display: {display_id}[/red]")
            sys.exit(2)

    buffer = asyncio.run(capture.capture_screen_area(Rect(x, y, width, height), target))
    _print_buffer(f"Area {x:g},{y:g} {width:g}x{height:g}", buffer)


@main.command()
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.pass_context
def color(ctx: click.Context, x: float, y: float) -> None:
    """Print the color of one screen pixel."""
    capture: ScreenCapture = ctx.obj["capture"]
    result = asyncio.run(capture.capture_screen_color(x, y))

    if result is None:
        console.print("[yellow]Pixel could not be captured[/yellow]")
        sys.exit(1)

    console.print(f"({x:g}, {y:g}) [bold]{result.hex}[/bold] rgba{result.to_tuple()}")


@main.command(name="all")
@click.pass_context
def all_displays(ctx: click.Context) -> None:
    """Capture all displays combined into one image."""
    capture: ScreenCapture = ctx.obj["capture"]
    buffer = asyncio.run(capture.capture_all_displays_combined())
    _print_buffer(
        f"All displays ({capture.config.composite.stitch_policy.value})",
        buffer,
    )


if __name__ == "__main__":
    main()
