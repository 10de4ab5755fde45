"""Exceptions for files app."""


class NotFoundOrUnauthorizedError(Exception):
    """Raised when a file is missing or not accessible to the caller.

    Both cases share one error so that callers who do not own a private
    file cannot learn whether it exists.
    """

    def __init__(self, file_id: int) -> None:
        """Initialize NotFoundOrUnauthorizedError.

        Args:
            file_id: Requested file ID.
        """
        self.file_id = file_id
        super().__init__(f'File not found or unauthorized: {file_id}')


class ResourceUnavailableError(Exception):
    """Raised when a readable file has no retrievable download URL."""

    def __init__(self, file_id: int) -> None:
        """Initialize ResourceUnavailableError.

        Args:
            file_id: File whose payload cannot be retrieved right now.
        """
        self.file_id = file_id
        super().__init__(f'File not available for download: {file_id}')


class UpstreamStoreFailureError(Exception):
    """Raised when the blob store fails an operation.

    The message names the operation only; provider details stay in the
    log and in ``__cause__``.
    """

    def __init__(self, operation: str) -> None:
        """Initialize UpstreamStoreFailureError.

        Args:
            operation: Blob store operation that failed.
        """
        self.operation = operation
        super().__init__(f'Storage operation failed: {operation}')
