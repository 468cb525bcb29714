"""Exceptions raised by the print mailer."""

from __future__ import annotations


class PrintMailerError(Exception):
    """Base class for failures that should stop a run."""


class InputFileError(PrintMailerError, OSError):
    """The print file could not be opened or read."""


class ConfigError(PrintMailerError):
    """Required configuration is missing or invalid."""


class ProviderError(PrintMailerError):
    """SendGrid rejected the message or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
