from pathlib import Path
from typing import Annotated

import typer

from hilbert_anim import OutputFormat
from hilbert_anim.coloring import DEFAULT_FUNCTION, ColoringRegistry
from hilbert_anim.config import (DEFAULT_FRAME_COUNT, DEFAULT_FRAMERATE,
                                 DEFAULT_ORDER, DEFAULT_OUTPUT_PATH,
                                 AnimationConfig, ConfigurationError)
from hilbert_anim.driver import render_animation
from hilbert_anim.encoders import EncodingError
from hilbert_anim.utilities.logging import get_logger

logger = get_logger(__name__)

CONFIGURATION_EXIT_CODE = 1
ENCODING_EXIT_CODE = 2


def render_command(
    output: Annotated[
        Path,
        typer.Argument(
            help="Output file (.gif, .webp, .webm) or a directory for PNG frames."
        ),
    ] = DEFAULT_OUTPUT_PATH,
    order: Annotated[
        int,
        typer.Option(
            "--order",
            help="Curve order; the image is 2^order pixels wide. "
            "Memory grows fourfold per order (order 12 needs about 1 GiB).",
        ),
    ] = DEFAULT_ORDER,
    function: Annotated[
        str, typer.Option("-f", "--function", help="Coloring function name.")
    ] = DEFAULT_FUNCTION,
    frames: Annotated[
        int, typer.Option("-n", "--frames", help="Number of frames.")
    ] = DEFAULT_FRAME_COUNT,
    framerate: Annotated[
        int, typer.Option("-r", "--framerate", help="Frames per second.")
    ] = DEFAULT_FRAMERATE,
    loops: Annotated[
        int | None,
        typer.Option(
            "-l",
            "--loops",
            help="Times the animation plays; 0 loops forever. "
            "Defaults to forever, or once for webm.",
        ),
    ] = None,
    bitrate: Annotated[
        str | None,
        typer.Option("-b", "--bitrate", help="Video bitrate for webm output, e.g. 2M."),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", help="Output format; defaults to the output extension."),
    ] = None,
    list_functions: Annotated[
        bool,
        typer.Option("--list-functions", help="List coloring functions and exit."),
    ] = False,
) -> None:
    """Render an animated Hilbert curve."""

    registry = ColoringRegistry()
    if list_functions:
        for name in registry.names():
            typer.echo(name)
        return

    try:
        config = AnimationConfig.create(
            order=order,
            function_name=function,
            frame_count=frames,
            framerate=framerate,
            loop_count=loops,
            bitrate=bitrate,
            output_path=output,
            output_format=output_format,
            registry=registry,
        )
    except ConfigurationError as error:
        logger.error("Invalid configuration: %s", error)
        raise typer.Exit(code=CONFIGURATION_EXIT_CODE) from error

    try:
        path = render_animation(config)
    except EncodingError as error:
        logger.error("Encoding failed: %s", error)
        raise typer.Exit(code=ENCODING_EXIT_CODE) from error
    typer.echo(f"Wrote {path}")
