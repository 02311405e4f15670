"""Environment configuration helpers."""

from hilbert_anim.utilities.env.config import Configuration as Configuration
from hilbert_anim.utilities.env.enums import RenderStrategy as RenderStrategy
