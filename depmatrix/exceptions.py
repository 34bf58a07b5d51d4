"""
Exception hierarchy for depmatrix.

Every error raised on purpose derives from :class:`DepMatrixError`. Keyword
context passed to the constructors is kept in ``details`` (``None`` values
are dropped) and rendered after the message, so log lines and the CLI's
error output carry the file, URL or option involved.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

RESPONSE_PREVIEW_LENGTH = 200


class DepMatrixError(Exception):
    """Base exception for all depmatrix errors.

    Args:
        message: Human-readable error message.
        **details: Structured context; ``None`` values are ignored.
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = {
            key: value for key, value in details.items() if value is not None
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ConfigError(DepMatrixError):
    """A configuration file is missing, unreadable or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, config=config_path, option=option)
        self.config_path = config_path
        self.option = option


class ManifestError(DepMatrixError):
    """A ``package.json`` manifest is not a JSON object."""

    def __init__(self, message: str, *, file_path: Optional[str] = None) -> None:
        super().__init__(message, file=file_path)
        self.file_path = file_path


class NetworkError(DepMatrixError):
    """The registry could not be reached or answered with an error.

    Only the first ``RESPONSE_PREVIEW_LENGTH`` characters of
    *response_body* are shown in ``details``; the attribute keeps it whole.
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        preview = None
        if response_body is not None:
            preview = response_body[:RESPONSE_PREVIEW_LENGTH]
            if len(response_body) > RESPONSE_PREVIEW_LENGTH:
                preview += "..."

        super().__init__(message, url=url, status_code=status_code, response=preview)
        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class RegistryError(NetworkError):
    """A package is unknown to the registry or its document is unusable."""

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.package_name = package_name
        if package_name is not None:
            self.details["package"] = package_name


class FileOperationError(DepMatrixError):
    """A file or directory could not be read or written."""

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            path=file_path,
            operation=operation,
            original_error=str(original_error) if original_error else None,
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
