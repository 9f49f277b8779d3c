"""Error types for dispatch over a linearization."""
from __future__ import annotations


class OperationNotFoundError(LookupError):
    """Raised when no class in a linearization provides an operation.

    Parameters
    ----------
    class_name:
        The class the lookup started from.
    operation:
        The operation that was requested.
    after:
        When the lookup was a "next in order" call, the class whose
        position it started after.
    """

    def __init__(self, class_name: str, operation: str, after: str | None = None) -> None:
        self.class_name = class_name
        self.operation = operation
        self.after = after
        if after is None:
            message = f"No class in the resolution order of {class_name!r} defines {operation!r}"
        else:
            message = (
                f"No class after {after!r} in the resolution order of {class_name!r} "
                f"defines {operation!r}"
            )
        super().__init__(message)
