from hilbert_anim.utilities.env.parsing import _env_flag, _env_int, _env_str

DEFAULT_FFMPEG_EXECUTABLE = "ffmpeg"
DEFAULT_WEBM_CODEC = "libvpx-vp9"
DEFAULT_WEBP_QUALITY = 80


class EncodingConfiguration:
    @classmethod
    def ffmpeg_executable(cls) -> str:
        return _env_str("HILBERT_ANIM_FFMPEG", default=DEFAULT_FFMPEG_EXECUTABLE)

    @classmethod
    def webm_codec(cls) -> str:
        return _env_str("HILBERT_ANIM_WEBM_CODEC", default=DEFAULT_WEBM_CODEC)

    @classmethod
    def webp_lossless(cls) -> bool:
        return _env_flag("HILBERT_ANIM_WEBP_LOSSLESS", default=True)

    @classmethod
    def webp_quality(cls) -> int:
        return _env_int(
            "HILBERT_ANIM_WEBP_QUALITY",
            default=DEFAULT_WEBP_QUALITY,
            minimum=0,
            maximum=100,
        )
