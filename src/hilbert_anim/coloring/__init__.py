from hilbert_anim.coloring.base import ColoringFunction as ColoringFunction
from hilbert_anim.coloring.base import apply_coloring as apply_coloring
from hilbert_anim.coloring.base import color_at as color_at
from hilbert_anim.coloring.registry import DEFAULT_FUNCTION as DEFAULT_FUNCTION
from hilbert_anim.coloring.registry import ColoringRegistry as ColoringRegistry
