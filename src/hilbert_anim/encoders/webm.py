from __future__ import annotations

import shutil
import subprocess
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from hilbert_anim.encoders.base import AnimationEncoder, EncodingError
from hilbert_anim.encoders.frames import FRAME_GLOB, write_frames
from hilbert_anim.utilities.logging import get_logger

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig

logger = get_logger(__name__)


def ffmpeg_command(
    config: "AnimationConfig", frames_dir: Path, *, executable: str, codec: str
) -> list[str]:
    cmd = [
        executable,
        "-y",
        "-framerate", str(config.framerate),
        # -stream_loop counts extra plays of the input.
        "-stream_loop", str(config.loop_count - 1),
        "-pattern_type", "glob",
        "-i", str(frames_dir / FRAME_GLOB),
        "-c:v", codec,
    ]
    if config.bitrate:
        cmd += ["-b:v", config.bitrate]
    cmd.append(str(config.output_path))
    return cmd


class WebmEncoder(AnimationEncoder):
    """Write PNG frames to a scratch directory and hand them to ffmpeg."""

    def encode(
        self, frames: Iterable[np.ndarray], config: "AnimationConfig"
    ) -> Path:
        executable = config.settings.ffmpeg_executable
        if shutil.which(executable) is None:
            raise EncodingError(f"ffmpeg executable '{executable}' not found on PATH")

        with tempfile.TemporaryDirectory(prefix="hilbert_anim_frames_") as tmpdir:
            frames_dir = Path(tmpdir) / "frames"
            count = write_frames(frames, frames_dir)
            cmd = ffmpeg_command(
                config,
                frames_dir,
                executable=executable,
                codec=config.settings.webm_codec,
            )
            logger.info("Encoding %d frames to %s with ffmpeg", count, config.output_path)
            logger.debug("Running: %s", " ".join(cmd))
            config.output_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                subprocess.run(cmd, check=True, capture_output=True, text=True)
            except subprocess.CalledProcessError as exc:
                logger.error("ffmpeg failed: %s", exc.stderr)
                raise EncodingError(
                    f"ffmpeg exited with status {exc.returncode}"
                ) from exc
            except OSError as exc:
                raise EncodingError("failed to run ffmpeg") from exc
        return config.output_path
