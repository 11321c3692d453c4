"""Exceptions shared by the subtitle services and API layer."""


class NotInitializedError(RuntimeError):
    """Raised when a controller is queried before ``initial()`` has completed."""

    def __init__(self, message: str = "Subtitle controller is not initialized"):
        super().__init__(message)


class SubtitleParseError(ValueError):
    """Raised when raw subtitle content cannot be parsed."""

    pass
