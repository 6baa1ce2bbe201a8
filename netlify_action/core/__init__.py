"""Core functionality for the deploy action."""

from netlify_action.core.exceptions import (
    ActionError,
    ConfigurationError,
    DeployError,
    GitHubAPIError,
    MissingInputError,
    NotificationError,
)

__all__ = [
    "ActionError",
    "ConfigurationError",
    "DeployError",
    "GitHubAPIError",
    "MissingInputError",
    "NotificationError",
]
