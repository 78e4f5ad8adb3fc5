from __future__ import annotations


class InterchangeError(Exception):
    """Base class for failures on diagram write paths."""


class EncodingError(InterchangeError):
    pass


class GenerationError(InterchangeError):
    pass


class ShareLinkTooLongError(GenerationError):
    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(f"Share link is {length} characters long (limit: {max_length})")
