"""Validated, immutable settings for one animation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hilbert_anim import OutputFormat
from hilbert_anim.coloring import (DEFAULT_FUNCTION, ColoringFunction,
                                   ColoringRegistry)
from hilbert_anim.curve import MAX_ORDER, curve_size, side_length
from hilbert_anim.utilities.env import Configuration, RenderStrategy

DEFAULT_ORDER = 9
DEFAULT_FRAME_COUNT = 256
DEFAULT_FRAMERATE = 30
# GIF and WEBP both store 0 as "repeat forever".
LOOP_FOREVER = 0
DEFAULT_OUTPUT_PATH = Path("out.webp")

_EXTENSION_FORMATS = {
    ".gif": OutputFormat.GIF,
    ".webp": OutputFormat.WEBP,
    ".webm": OutputFormat.WEBM,
}


class ConfigurationError(ValueError):
    """Raised when animation settings are rejected before rendering starts."""


def resolve_output_format(
    output_path: Path, explicit: OutputFormat | str | None = None
) -> OutputFormat:
    """Pick the output format from ``explicit`` or the path's extension.

    A path without an extension is treated as a directory of PNG frames.
    """

    if explicit is not None:
        try:
            return OutputFormat(str(explicit).lower())
        except ValueError as exc:
            raise ConfigurationError(f"unknown output format '{explicit}'") from exc

    suffix = output_path.suffix.lower()
    if not suffix:
        return OutputFormat.FRAMES
    try:
        return _EXTENSION_FORMATS[suffix]
    except KeyError:
        raise ConfigurationError(
            f"unknown format '{suffix.lstrip('.')}' for output '{output_path}'"
        ) from None


@dataclass(frozen=True)
class EnvironmentSettings:
    """Environment-driven rendering and encoding knobs, read once per run."""

    render_strategy: RenderStrategy
    render_workers: int
    progress: bool
    webp_lossless: bool
    webp_quality: int
    ffmpeg_executable: str
    webm_codec: str

    @classmethod
    def from_environment(cls) -> "EnvironmentSettings":
        try:
            return cls(
                render_strategy=Configuration.render_strategy(),
                render_workers=Configuration.render_workers(),
                progress=Configuration.progress_enabled(),
                webp_lossless=Configuration.webp_lossless(),
                webp_quality=Configuration.webp_quality(),
                ffmpeg_executable=Configuration.ffmpeg_executable(),
                webm_codec=Configuration.webm_codec(),
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


@dataclass(frozen=True)
class AnimationConfig:
    order: int
    function_name: str
    frame_count: int
    framerate: int
    loop_count: int
    bitrate: str | None
    output_path: Path
    output_format: OutputFormat
    settings: EnvironmentSettings
    coloring_fn: ColoringFunction = field(repr=False, compare=False)

    @property
    def side_length(self) -> int:
        return side_length(self.order)

    @property
    def size(self) -> int:
        return curve_size(self.order)

    @classmethod
    def create(
        cls,
        *,
        order: int = DEFAULT_ORDER,
        function_name: str = DEFAULT_FUNCTION,
        frame_count: int = DEFAULT_FRAME_COUNT,
        framerate: int = DEFAULT_FRAMERATE,
        loop_count: int | None = None,
        bitrate: str | None = None,
        output_path: Path | str = DEFAULT_OUTPUT_PATH,
        output_format: OutputFormat | str | None = None,
        registry: ColoringRegistry | None = None,
    ) -> "AnimationConfig":
        """Validate user settings and resolve the coloring function.

        ``loop_count`` is the number of plays, with ``0`` meaning forever. It
        defaults to forever for GIF and WEBP and to a single play for WEBM,
        which has no way to store an endless loop. Environment settings are
        read here too, so every configuration problem surfaces before any
        frame is rendered.
        """

        if not 1 <= order <= MAX_ORDER:
            raise ConfigurationError(
                f"order must be between 1 and {MAX_ORDER}, got {order}"
            )
        if frame_count < 1:
            raise ConfigurationError(f"frame count must be positive, got {frame_count}")
        if framerate < 1:
            raise ConfigurationError(f"framerate must be positive, got {framerate}")

        path = Path(output_path)
        resolved_format = resolve_output_format(path, output_format)
        if loop_count is None:
            loop_count = 1 if resolved_format == OutputFormat.WEBM else LOOP_FOREVER
        if loop_count < 0:
            raise ConfigurationError(
                f"loop count must not be negative, got {loop_count}"
            )
        if loop_count == LOOP_FOREVER and resolved_format == OutputFormat.WEBM:
            raise ConfigurationError("webm output cannot loop forever")

        registry = registry or ColoringRegistry()
        coloring_fn = registry.get(function_name)
        if coloring_fn is None:
            raise ConfigurationError(
                f"unknown function '{function_name}' "
                f"(available: {', '.join(registry.names())})"
            )

        return cls(
            order=order,
            function_name=function_name,
            frame_count=frame_count,
            framerate=framerate,
            loop_count=loop_count,
            bitrate=bitrate or None,
            output_path=path,
            output_format=resolved_format,
            settings=EnvironmentSettings.from_environment(),
            coloring_fn=coloring_fn,
        )
