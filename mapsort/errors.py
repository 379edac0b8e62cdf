"""Domain errors and failure typing."""


class MapSortError(Exception):
    """Base class for map sorting failures."""

    error_code = "MAPSORT_ERROR"


class TypeMismatchError(MapSortError, TypeError):
    """Raised when two sort keys do not support ordering comparison."""

    error_code = "TYPE_MISMATCH"

    def __init__(self, left: object, right: object) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Sort key {left!r} of type {type(left).__name__} "
            f"cannot be ordered against {right!r} of type {type(right).__name__}"
        )


class ConfigError(MapSortError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"
