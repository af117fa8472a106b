"""
Error kinds raised by the image pipeline.

Every error remembers the pipeline stage that produced it
(load, decode, rasterize, crop, resample, encode) so the CLI can
report where things went wrong without losing the original cause.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional


class ImageToolError(Exception):
    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class DecodeError(ImageToolError):
    """Input bytes are not a valid image."""


class ParseError(DecodeError):
    """Input bytes are not a valid vector document."""


class UnsupportedFormat(ImageToolError):
    pass


class UnsupportedAlgorithm(ImageToolError):
    pass


class InvalidParameters(ImageToolError):
    pass


class ImageIOError(ImageToolError):
    pass


class EncodeError(ImageToolError):
    pass


@contextmanager
def pipeline_stage(stage_name: str) -> Iterator[None]:
    """
    Tag errors raised inside the block with `stage_name`.

    Errors that already carry a stage keep it. A bare OSError becomes
    an ImageIOError chained to the original.
    """
    try:
        yield
    except ImageToolError as error:
        if error.stage is None:
            error.stage = stage_name
        raise
    except OSError as error:
        raise ImageIOError(str(error), stage=stage_name) from error
