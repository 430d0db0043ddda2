"""Exceptions raised by sink adapters."""


class SinkWriteError(RuntimeError):
    """The sink rejected a point or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
