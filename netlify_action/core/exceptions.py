"""Custom exceptions for the deploy action."""

from typing import Any


class ActionError(Exception):
    """Base exception for the deploy action."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used for diagnostic dumps."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ActionError):
    """Required configuration is missing or unusable."""

    pass


class MissingInputError(ConfigurationError):
    """One or more required action inputs are absent or blank."""

    def __init__(self, names: list[str]):
        super().__init__(
            f"Input required and not supplied: {', '.join(names)}",
            {"inputs": names},
        )
        self.names = names


class DeployError(ActionError):
    """Netlify deploy failed or returned no usable record."""

    def __init__(self, message: str, output: str | None = None):
        details = {}
        if output:
            details["output"] = output
        super().__init__(message, details)


class GitHubAPIError(ActionError):
    """GitHub API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, url: str | None = None):
        details: dict[str, Any] = {"status_code": status_code}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.status_code = status_code


class NotificationError(ActionError):
    """A single GitHub notification call failed."""

    def __init__(self, action: str, message: str, cause: Exception | None = None):
        details: dict[str, Any] = {"action": action}
        if isinstance(cause, ActionError):
            details.update(cause.details)
        super().__init__(message, details)
        self.action = action
        self.cause = cause
