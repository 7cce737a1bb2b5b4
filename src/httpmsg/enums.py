"""Enumerated values fixed by the message contracts."""

from enum import Enum, IntEnum


class HttpMethod(str, Enum):
    """Request methods a Request may carry."""
    PUT = "PUT"
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PATCH = "PATCH"
    TRACE = "TRACE"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"

    def __str__(self) -> str:
        return self.value


class UploadError(IntEnum):
    """
    Failure codes reported for a file upload.

    The numbering follows PHP's ``UPLOAD_ERR_*`` constants. 5 is unassigned
    there and has no member here.
    """
    EXCEEDS_INI_SIZE = 1        # larger than the server-wide limit
    EXCEEDS_FORM_SIZE = 2       # larger than the limit declared by the form
    INCOMPLETE = 3              # only part of the file arrived
    NO_FILE = 4
    NO_TMP_DIR = 6
    TMP_DIR_NOT_WRITABLE = 7
    CANCELED_BY_EXTENSION = 8


class StreamMetadataKey(str, Enum):
    """Keys recognised by ``StreamInterface.get_metadata``."""
    MODE = "mode"
    SEEKABLE = "seekable"
    URI = "uri"
    CLOSED = "closed"
    WRAPPER_TYPE = "wrapper_type"
