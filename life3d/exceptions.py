from __future__ import annotations


class Life3DError(Exception):
    """Base class for errors raised by life3d."""

    pass


class ConfigError(Life3DError, ValueError):
    """Raised when a world, rule set or health counter is built from invalid parameters.

    These are construction-time failures. Nothing is clamped or replaced by a default.
    """

    pass


class GenerationError(Life3DError, RuntimeError):
    """Raised when a worker fails while advancing a generation.

    The live buffer has already been rolled back to the pre-update snapshot when this
    is raised, so callers never observe a partially advanced grid.
    """

    def __init__(self, failed_chunks: int, total_chunks: int):
        self.failed_chunks = failed_chunks
        self.total_chunks = total_chunks
        super().__init__(
            f"Generation update failed in {failed_chunks} of {total_chunks} chunk(s); "
            "the world was restored to the previous generation."
        )
