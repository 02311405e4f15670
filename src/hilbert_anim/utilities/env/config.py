from hilbert_anim.utilities.env.encoding import EncodingConfiguration
from hilbert_anim.utilities.env.rendering import RenderingConfiguration


class Configuration(
    RenderingConfiguration,
    EncodingConfiguration,
):
    """Aggregate environment configuration helpers."""
