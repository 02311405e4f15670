from enum import StrEnum


class RenderStrategy(StrEnum):
    THREADS = "threads"
    SERIAL = "serial"
