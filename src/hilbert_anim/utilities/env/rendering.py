import os

from hilbert_anim.utilities.env.enums import RenderStrategy
from hilbert_anim.utilities.env.parsing import _env_flag, _env_int

DEFAULT_RENDER_STRATEGY = RenderStrategy.THREADS


class RenderingConfiguration:
    @classmethod
    def render_strategy(cls) -> RenderStrategy:
        strategy = os.environ.get(
            "HILBERT_ANIM_RENDER_STRATEGY", DEFAULT_RENDER_STRATEGY.value
        ).strip().lower()
        try:
            return RenderStrategy(strategy)
        except ValueError as exc:
            raise ValueError(
                "HILBERT_ANIM_RENDER_STRATEGY must be 'threads' or 'serial'"
            ) from exc

    @classmethod
    def render_workers(cls) -> int:
        return _env_int(
            "HILBERT_ANIM_RENDER_WORKERS",
            default=os.cpu_count() or 1,
            minimum=1,
        )

    @classmethod
    def progress_enabled(cls) -> bool:
        return _env_flag("HILBERT_ANIM_PROGRESS", default=True)
