from __future__ import annotations

from hilbert_anim import OutputFormat
from hilbert_anim.encoders.base import AnimationEncoder as AnimationEncoder
from hilbert_anim.encoders.base import EncodingError as EncodingError
from hilbert_anim.encoders.frames import FramesDirectoryEncoder
from hilbert_anim.encoders.gif import GifEncoder
from hilbert_anim.encoders.webm import WebmEncoder
from hilbert_anim.encoders.webp import WebpEncoder

_ENCODERS: dict[OutputFormat, type[AnimationEncoder]] = {
    OutputFormat.GIF: GifEncoder,
    OutputFormat.WEBP: WebpEncoder,
    OutputFormat.WEBM: WebmEncoder,
    OutputFormat.FRAMES: FramesDirectoryEncoder,
}


def get_encoder(output_format: OutputFormat) -> AnimationEncoder:
    return _ENCODERS[output_format]()
