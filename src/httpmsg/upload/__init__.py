"""Uploaded file handling."""

from .uploaded_file import UploadedFile

__all__ = [
    "UploadedFile",
]
