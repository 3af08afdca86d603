"""Typer CLI application."""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cellterm.config import BACKENDS, TerminalConfig
from cellterm.core.color import Color, ColorPair
from cellterm.errors import TerminalError
from cellterm.render.ansi import AnsiRenderer
from cellterm.surface import BorderSurface, FillSurface, StackSurface, TextSurface, render
from cellterm.terminal import MemoryTerminal, Terminal, init_terminal

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_config(backend: Optional[str], width: int, height: int) -> TerminalConfig:
    config = TerminalConfig.from_env()
    if backend:
        config.with_backend(backend)
    return config.with_memory_size(width, height)


def demo_surface(term: Terminal) -> StackSurface:
    """Palette swatches and a framed caption."""
    width, height = term.size()
    stack = StackSurface(width, height)
    for color in Color:
        row, col = divmod(color.value, 8)
        swatch = FillSurface(4, 1, color=ColorPair(bg=color))
        stack.add(swatch, 2 + col * 5, 1 + row)

    caption = TextSurface(
        [f"backend  {term.name}", f"size     {width}x{height}"],
        color=ColorPair(fg=Color.LIGHT_WHITE),
    )
    stack.add(BorderSurface(caption, ColorPair(fg=Color.LIGHT_CYAN), title="cellterm"), 2, 4)
    return stack


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="cellterm",
        help="Draw colored text into terminal cells.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
    ) -> None:
        configure_logging(verbose)

    @app.command()
    def demo(
        backend: Annotated[Optional[str], typer.Option("--backend", "-b", help=f"One of {', '.join(BACKENDS)}")] = None,
        width: Annotated[int, typer.Option(help="Width for the memory backend")] = 60,
        height: Annotated[int, typer.Option(help="Height for the memory backend")] = 10,
        hold: Annotated[float, typer.Option(help="Seconds to keep a real screen up")] = 2.0,
    ) -> None:
        """Draw the palette and a framed caption."""
        output: Optional[str] = None
        try:
            config = build_config(backend, width, height)
            with init_terminal(config=config) as term:
                term.clear()
                render(demo_surface(term), term)
                term.set_cursor_pos(0, term.size()[1] - 1)
                term.write_in_color("done", ColorPair(fg=Color.LIGHT_GREEN))
                if isinstance(term, MemoryTerminal):
                    output = AnsiRenderer().render(term.screen)
                else:
                    time.sleep(hold)
        except (TerminalError, ValueError) as exc:
            console.print(f"[red]Error:[/] {exc}")
            raise typer.Exit(1)
        if output is not None:
            print(output)

    @app.command()
    def info(
        backend: Annotated[Optional[str], typer.Option("--backend", "-b", help=f"One of {', '.join(BACKENDS)}")] = None,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show terminal size, cursor and default colors."""
        try:
            config = TerminalConfig.from_env()
            if backend:
                config.with_backend(backend)
            with init_terminal(config=config) as term:
                fg, bg = term.get_default_color().resolved()
                data = {
                    "backend": term.name,
                    "size": list(term.size()),
                    "cursor": list(term.get_cursor_pos()),
                    "default_fg": fg.name.lower(),
                    "default_bg": bg.name.lower(),
                }
        except (TerminalError, ValueError) as exc:
            console.print(f"[red]Error:[/] {exc}")
            raise typer.Exit(1)

        if json_output:
            print(json.dumps(data, indent=2))
        else:
            console.print(f"[bold cyan]Terminal ({data['backend']})[/]")
            console.print(f"  Size:    {data['size'][0]}x{data['size'][1]}")
            console.print(f"  Cursor:  {tuple(data['cursor'])}")
            console.print(f"  Colors:  {data['default_fg']} on {data['default_bg']}")

    @app.command()
    def palette() -> None:
        """List the 16 colors and their native attributes."""
        from cellterm.terminal.console import color_bits

        table = Table(title="cellterm palette")
        table.add_column("Color")
        table.add_column("Hue", justify="right")
        table.add_column("SGR fg/bg")
        table.add_column("Console", justify="right")
        if os.name != "nt":
            from cellterm.terminal.curses_backend import pair_number
            table.add_column("Curses pair on black", justify="right")

        for color in Color:
            cells = [
                color.name.lower(),
                str(color.hue),
                f"{color.to_sgr_fg()}/{color.to_sgr_bg()}",
                f"0x{color_bits(color):x}",
            ]
            if os.name != "nt":
                bold = " +bold" if color.is_light else ""
                cells.append(f"{pair_number(color, Color.DARK_BLACK)}{bold}")
            table.add_row(*cells)
        console.print(table)

    return app
