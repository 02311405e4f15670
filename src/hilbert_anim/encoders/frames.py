from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from hilbert_anim.encoders.base import AnimationEncoder, EncodingError, to_image
from hilbert_anim.utilities.logging import get_logger

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig

logger = get_logger(__name__)

FRAME_GLOB = "frame_*.png"


def frame_filename(frame_index: int) -> str:
    return f"frame_{frame_index:05d}.png"


def _clear_frames_directory(out_dir: Path) -> None:
    """Remove frames left by an earlier run.

    Only a directory holding nothing but frame PNGs is reused, so pointing
    the tool at an unrelated directory never deletes anything.
    """

    if not out_dir.is_dir():
        return
    entries = list(out_dir.iterdir())
    strays = [
        entry.name
        for entry in entries
        if not (entry.is_file() and entry.match(FRAME_GLOB))
    ]
    if strays:
        raise EncodingError(
            f"refusing to replace '{out_dir}': it holds files other than frames "
            f"({', '.join(sorted(strays)[:3])})"
        )
    for entry in entries:
        entry.unlink()


def write_frames(frames: Iterable[np.ndarray], out_dir: Path) -> int:
    """Write ``frames`` as numbered PNGs into a fresh ``out_dir``.

    Returns the number of frames written.
    """

    try:
        _clear_frames_directory(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EncodingError(f"failed to prepare frames directory '{out_dir}'") from exc

    count = 0
    for frame_index, raster in enumerate(frames):
        target = out_dir / frame_filename(frame_index)
        try:
            to_image(raster).save(target, format="PNG")
        except (OSError, ValueError) as exc:
            raise EncodingError(f"failed to save frame {frame_index}") from exc
        count += 1

    if count == 0:
        raise EncodingError("no frames to encode")
    return count


class FramesDirectoryEncoder(AnimationEncoder):
    def encode(
        self, frames: Iterable[np.ndarray], config: "AnimationConfig"
    ) -> Path:
        out_dir = config.output_path
        count = write_frames(frames, out_dir)
        logger.info("Wrote %d frames to %s", count, out_dir)
        return out_dir
