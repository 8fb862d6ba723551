"""Exceptions raised when a decomposition cannot be carried out."""


class DecompositionError(ValueError):
    """Base class for every error reported by a decomposition."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecompositionError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class ParameterError(DecompositionError):
    """A decomposition parameter is out of range or inconsistent."""


class SeriesError(DecompositionError):
    """The input series is unsuitable for the requested decomposition."""