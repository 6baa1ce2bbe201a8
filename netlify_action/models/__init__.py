"""Data models for the deploy action."""

from netlify_action.models.config import DeployConfig
from netlify_action.models.context import EventKind, TriggerContext
from netlify_action.models.deployment import (
    DRY_RUN_DEPLOY,
    DeployRequest,
    NetlifyDeploy,
    RunResult,
)
from netlify_action.models.event import GitHubEvent

__all__ = [
    # Config models
    "DeployConfig",
    # Context models
    "EventKind",
    "GitHubEvent",
    "TriggerContext",
    # Deployment models
    "DRY_RUN_DEPLOY",
    "DeployRequest",
    "NetlifyDeploy",
    "RunResult",
]
