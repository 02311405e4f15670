from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig


class EncodingError(RuntimeError):
    """Raised when frames cannot be written to the output container."""


class AnimationEncoder(ABC):
    """Sink that writes an ordered frame stream to ``config.output_path``."""

    @abstractmethod
    def encode(
        self, frames: Iterable[np.ndarray], config: "AnimationConfig"
    ) -> Path:
        """Consume ``frames`` in order and return the written path.

        Raises :class:`EncodingError` when the container cannot be written,
        including when ``frames`` is empty.
        """


def to_image(raster: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8), mode="RGB")


def iter_images(frames: Iterable[np.ndarray]) -> Iterator[Image.Image]:
    for raster in frames:
        yield to_image(raster)


def split_first(frames: Iterable[np.ndarray]) -> tuple[Image.Image, Iterator[Image.Image]]:
    images = iter_images(frames)
    try:
        first = next(images)
    except StopIteration:
        raise EncodingError("no frames to encode") from None
    return first, images
