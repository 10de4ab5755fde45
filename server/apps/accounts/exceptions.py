"""Exceptions for accounts app."""


class UnauthenticatedError(Exception):
    """Raised when an operation needs a caller and none was resolved."""

    def __init__(self, operation: str) -> None:
        """Initialize UnauthenticatedError.

        Args:
            operation: Name of the refused operation.
        """
        self.operation = operation
        super().__init__(f'Not authenticated: {operation} requires a caller')
