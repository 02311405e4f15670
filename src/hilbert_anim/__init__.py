from enum import StrEnum


class OutputFormat(StrEnum):
    GIF = "gif"
    WEBP = "webp"
    WEBM = "webm"
    FRAMES = "frames"
