"""Produce the frames of an animation in order and hand them to an encoder."""

from __future__ import annotations

from collections import deque
from collections.abc import Generator, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

import numpy as np
from tqdm import tqdm

from hilbert_anim import OutputFormat
from hilbert_anim.config import AnimationConfig
from hilbert_anim.encoders import AnimationEncoder, get_encoder
from hilbert_anim.frame import FrameRenderer
from hilbert_anim.utilities.env import RenderStrategy
from hilbert_anim.utilities.logging import get_logger

logger = get_logger(__name__)

IN_FLIGHT_PER_WORKER = 2


class AnimationDriver:
    """Render ``config.frame_count`` frames, yielding them in frame order.

    With the ``threads`` strategy frames are rendered on a worker pool while at
    most ``IN_FLIGHT_PER_WORKER * workers`` of them are pending, so memory stays
    bounded no matter how many frames the animation has.
    """

    def __init__(
        self,
        config: AnimationConfig,
        *,
        strategy: RenderStrategy | None = None,
        workers: int | None = None,
    ) -> None:
        self._config = config
        self._renderer = FrameRenderer(config)
        self._strategy = strategy or config.settings.render_strategy
        self._workers = workers or config.settings.render_workers

    @property
    def config(self) -> AnimationConfig:
        return self._config

    def run(self) -> Generator[np.ndarray, None, None]:
        if self._strategy == RenderStrategy.SERIAL or self._workers == 1:
            return self._run_serial()
        return self._run_threaded()

    def _run_serial(self) -> Generator[np.ndarray, None, None]:
        for frame_index in range(self._config.frame_count):
            yield self._renderer.render(frame_index)

    def _run_threaded(self) -> Generator[np.ndarray, None, None]:
        max_in_flight = self._workers * IN_FLIGHT_PER_WORKER
        pending: deque[Future[np.ndarray]] = deque()
        next_index = 0
        self._renderer.prepare()
        executor = ThreadPoolExecutor(
            max_workers=self._workers, thread_name_prefix="hilbert-frame"
        )
        try:
            while next_index < self._config.frame_count or pending:
                while (
                    next_index < self._config.frame_count
                    and len(pending) < max_in_flight
                ):
                    pending.append(executor.submit(self._renderer.render, next_index))
                    next_index += 1
                yield pending.popleft().result()
        finally:
            for future in pending:
                future.cancel()
            executor.shutdown(wait=True, cancel_futures=True)


def render_animation(
    config: AnimationConfig,
    *,
    encoder: AnimationEncoder | None = None,
    driver: AnimationDriver | None = None,
) -> Path:
    """Render every frame of ``config`` and write the animation to disk."""

    encoder = encoder or get_encoder(config.output_format)
    driver = driver or AnimationDriver(config)
    if config.bitrate and config.output_format != OutputFormat.WEBM:
        logger.warning(
            "Bitrate %s is only used for webm output; ignoring it for %s",
            config.bitrate,
            config.output_format,
        )

    logger.info(
        "Rendering %d frames of a %dx%d order-%d curve with '%s'",
        config.frame_count,
        config.side_length,
        config.side_length,
        config.order,
        config.function_name,
    )
    frames = driver.run()
    try:
        stream: Iterable[np.ndarray] = frames
        if config.settings.progress:
            stream = tqdm(frames, total=config.frame_count, desc="frames", unit="frame")
        return encoder.encode(stream, config)
    finally:
        # Stops outstanding renders when the encoder bails out early.
        frames.close()
