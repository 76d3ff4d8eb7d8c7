"""Errors that abort an analysis request.

Everything else (missing face, failed upload) is reported through the result record.
"""


class AnalysisError(Exception):
    """Base class for errors reported to the caller as a single message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInput(AnalysisError):
    """The upload is not an image or exceeds the size limit."""


class DecodeFailure(AnalysisError):
    """The image bytes could not be decoded."""


class BackendUnavailable(AnalysisError):
    """The compute backend or the classifier model could not be brought up."""
