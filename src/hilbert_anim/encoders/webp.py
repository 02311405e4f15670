from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from hilbert_anim.encoders.base import AnimationEncoder, EncodingError, split_first
from hilbert_anim.utilities.logging import get_logger

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig

logger = get_logger(__name__)


def webp_frame_durations(frame_count: int, framerate: int) -> list[int]:
    """Per-frame durations that keep rounded timestamps on ``k * 1000 / framerate``."""

    step = 1000.0 / framerate
    return [
        round((k + 1) * step) - round(k * step) for k in range(frame_count)
    ]


class WebpEncoder(AnimationEncoder):
    def encode(
        self, frames: Iterable[np.ndarray], config: "AnimationConfig"
    ) -> Path:
        path = config.output_path
        first, rest = split_first(frames)
        # The WEBP muxer needs every frame before it can write the container.
        images = [first, *rest]
        lossless = config.settings.webp_lossless
        logger.info(
            "Writing WEBP %s (%d frames, lossless=%s)", path, len(images), lossless
        )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            images[0].save(
                path,
                format="WEBP",
                save_all=True,
                append_images=images[1:],
                duration=webp_frame_durations(len(images), config.framerate),
                # 0 repeats forever, like GIF.
                loop=config.loop_count,
                lossless=lossless,
                quality=config.settings.webp_quality,
                minimize_size=True,
            )
        except (OSError, ValueError) as exc:
            raise EncodingError(f"failed to write webp '{path}'") from exc
        return path
