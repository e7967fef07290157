"""Errors surfaced through the response envelope.

Each class carries the HTTP-like status hint reported to the caller.
"""


class ReadingLogError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ReadingLogError):
    """The backing store, a sheet, or a required column is missing. Never retried."""

    status_code = 500


class NotFoundError(ReadingLogError):
    status_code = 404


class LockTimeoutError(ReadingLogError):
    """The mutation gate could not be acquired in time; the caller may try again."""

    status_code = 503


class InvalidPayloadError(ReadingLogError):
    status_code = 400
