"""Command-line preview tool for Styled Text."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from styled_text import __version__
from styled_text.config import get_settings
from styled_text.core.compositor import CompositionError, Compositor
from styled_text.core.resolvers import DirectoryImageResolver
from styled_text.formats import SUPPORTED_FORMATS, get_renderer
from styled_text.formats.terminal_renderer import TerminalRenderer
from styled_text.formatting.presets import PRESETS, get_preset

app = typer.Typer(
    name="styled-text",
    help="Preview how highlight rules and image markers style a text file.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Styled Text v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library debug logging through rich when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Text file to compose",
        exists=True,
        dir_okay=False,
    ),
    preset: str = typer.Option(
        "markdown",
        "--preset",
        "-p",
        help=f"Highlight rule preset ({', '.join(PRESETS)})",
    ),
    images: Optional[Path] = typer.Option(
        None,
        "--images",
        "-i",
        help="Directory to resolve image markers against "
        "(default: STYLED_TEXT_IMAGE_DIR, else the file's folder)",
        file_okay=False,
    ),
    max_image_width: Optional[float] = typer.Option(
        None,
        "--max-image-width",
        "-w",
        help="Largest allowed image dimension "
        "(default: STYLED_TEXT_MAX_IMAGE_WIDTH, else 800)",
    ),
    output_format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help=f"Output format ({', '.join(SUPPORTED_FORMATS)})",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write rendered output to a file instead of the terminal",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Compose a text file and show the styled result.

    Examples:

        styled-text notes.md

        styled-text notes.md --images ./assets --max-image-width 400

        styled-text notes.md --format html --output notes.html

        styled-text log.txt --preset url
    """
    configure_logging(verbose)
    settings = get_settings()

    try:
        rules = get_preset(preset)
        renderer = get_renderer(output_format)()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    image_dir = images or settings.image_dir or path.parent
    compositor = Compositor(
        rules=rules,
        image_resolver=DirectoryImageResolver(image_dir),
        max_image_width=max_image_width,
        settings=settings,
    )

    if verbose:
        console.print(f"[blue]Composing:[/blue] {path}")
        console.print(f"[blue]Preset:[/blue] {preset} ({len(rules)} rules)")
        console.print(f"[blue]Images:[/blue] {image_dir}")

    try:
        document = compositor.compose_file(path)
    except CompositionError as e:
        console.print(f"[red]Error composing {path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    if output is not None:
        renderer.write(document, output)
        console.print(f"[green]Success:[/green] {output}")
    elif isinstance(renderer, TerminalRenderer):
        console.print(renderer.to_text(document))
    else:
        console.print(renderer.render(document), markup=False, highlight=False)

    if verbose:
        console.print(
            f"\n[bold]Complete:[/bold] {len(document.spans)} spans, "
            f"{len(document.attachments)} image(s)"
        )


if __name__ == "__main__":
    app()
