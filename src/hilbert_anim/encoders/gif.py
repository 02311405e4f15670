from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from hilbert_anim.encoders.base import AnimationEncoder, EncodingError, split_first
from hilbert_anim.utilities.logging import get_logger

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig

logger = get_logger(__name__)


def gif_frame_duration_ms(framerate: int) -> int:
    # GIF durations are stored in 10 ms increments. Round to the closest
    # representable value while keeping a minimum non-zero duration.
    return max(int(round((1000 / framerate) / 10.0) * 10), 10)


def gif_loop_options(loop_count: int) -> dict[str, Any]:
    """GIF ``loop`` counts repeats after the first play; omit it to play once.

    ``loop_count == 0`` maps to ``loop=0``, which viewers repeat forever.
    """

    if loop_count == 0:
        return {"loop": 0}
    if loop_count == 1:
        return {}
    return {"loop": loop_count - 1}


class GifEncoder(AnimationEncoder):
    def encode(
        self, frames: Iterable[np.ndarray], config: "AnimationConfig"
    ) -> Path:
        path = config.output_path
        first, rest = split_first(frames)
        duration_ms = gif_frame_duration_ms(config.framerate)
        logger.info("Writing GIF %s (%d ms per frame)", path, duration_ms)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            first.save(
                path,
                save_all=True,
                append_images=rest,
                format="GIF",
                duration=duration_ms,
                **gif_loop_options(config.loop_count),
            )
        except (OSError, ValueError) as exc:
            raise EncodingError(f"failed to write gif '{path}'") from exc
        return path
