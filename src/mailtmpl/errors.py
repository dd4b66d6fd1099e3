from __future__ import annotations

from typing import Optional


class MailtmplError(Exception):
    """Base class for errors raised by mailtmpl"""


class DirectoryNotFoundError(MailtmplError, FileNotFoundError):
    """Raise when the templates directory does not exist"""


class NoTemplatesError(MailtmplError):
    """Raise when no templates are found locally or on the server"""


class MissingTokenError(MailtmplError):
    """Raise when no server token is provided"""


class MissingAliasError(MailtmplError):
    """Raise when a template that must be edited has no alias"""


class ApiError(MailtmplError):
    """Raise when the template API returns an error or cannot be reached"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class RemoteFetchError(MailtmplError):
    """Raise when the remote template list cannot be retrieved"""


class ConfigError(MailtmplError, ValueError):
    """Raise when the settings file cannot be read or holds invalid values"""
