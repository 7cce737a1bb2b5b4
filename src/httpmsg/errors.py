"""Exceptions raised by the message value objects, streams and uploads."""


class HttpMessageError(Exception):
    """Base class for every error raised by httpmsg."""


class InvalidArgumentError(HttpMessageError, ValueError):
    """Raised when a constructor or ``with_*`` call receives an invalid value."""


class ResourceStateError(HttpMessageError, RuntimeError):
    """Raised when an operation is not valid for a resource in its current state."""


class ResourceConsumedError(ResourceStateError):
    """Raised when an uploaded file has already been moved."""


class StreamError(ResourceStateError):
    """Raised when a stream operation fails or the stream is unusable."""


class UploadTransferError(ResourceStateError):
    """Raised when an uploaded file cannot be transferred to its destination."""
