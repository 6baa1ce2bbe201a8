"""External services used by the deploy action."""

from netlify_action.services.github import GitHubClient
from netlify_action.services.netlify import NetlifyDeployer
from netlify_action.services.notifier import Notifier

__all__ = [
    "GitHubClient",
    "NetlifyDeployer",
    "Notifier",
]
