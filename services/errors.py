from __future__ import annotations


class DatasetError(ValueError):
    """Base class for upload problems that are shown to the user as-is."""

    user_message = "Failed to parse file."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.user_message)
        self.detail = detail


class UnsupportedFileTypeError(DatasetError):
    user_message = "Unsupported file type. Please upload a CSV or JSON file."


class ParseError(DatasetError):
    user_message = "Failed to parse file."
