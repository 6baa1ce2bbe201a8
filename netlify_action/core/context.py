"""Context extraction.

Turns the raw event payload and action inputs into an immutable
``TriggerContext`` and a validated ``DeployConfig``.
"""

import json
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from netlify_action.core.exceptions import ConfigurationError, MissingInputError
from netlify_action.models.config import REQUIRED_INPUTS, DeployConfig, InputName
from netlify_action.models.context import TriggerContext
from netlify_action.models.event import GitHubEvent
from netlify_action.utils.logging import get_logger

logger = get_logger(__name__)


def _flag(inputs: Mapping[str, str], name: InputName) -> bool:
    return inputs.get(name.value, "") == "true"


def _optional(inputs: Mapping[str, str], name: InputName) -> str | None:
    return inputs.get(name.value) or None


def extract_config(inputs: Mapping[str, str]) -> DeployConfig:
    """Validate action inputs.

    Args:
        inputs: Input values keyed by input name (``build-dir`` etc.)

    Returns:
        The validated deploy configuration

    Raises:
        MissingInputError: If any required input is absent or blank
    """
    missing = [
        name.value for name in REQUIRED_INPUTS
        if not inputs.get(name.value, "").strip()
    ]
    if missing:
        raise MissingInputError(missing)

    return DeployConfig(
        github_token=inputs[InputName.GITHUB_TOKEN.value],
        netlify_auth_token=inputs[InputName.NETLIFY_AUTH_TOKEN.value],
        site_id=inputs[InputName.NETLIFY_SITE_ID.value],
        build_dir=inputs[InputName.BUILD_DIR.value],
        functions_dir=_optional(inputs, InputName.FUNCTIONS_DIR),
        message=_optional(inputs, InputName.MESSAGE),
        deploy_environment=_optional(inputs, InputName.DEPLOYMENT_ENVIRONMENT),
        deploy_description=_optional(inputs, InputName.DEPLOYMENT_DESCRIPTION),
        draft=_flag(inputs, InputName.DRAFT),
        dry_run=_flag(inputs, InputName.DRY_RUN),
        comment_on_commit=_flag(inputs, InputName.COMMENT_ON_COMMIT),
        comment_on_pull_request=_flag(inputs, InputName.COMMENT_ON_PULL_REQUEST),
        deploy_is_transient=_flag(inputs, InputName.DEPLOYMENT_IS_TRANSIENT),
        deploy_is_production=_flag(inputs, InputName.DEPLOYMENT_IS_PRODUCTION),
        report_deployment_status=_flag(inputs, InputName.DEPLOYMENT_REPORT_STATUS),
    )


def load_event_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook payload the runner stored for this run."""
    if not event_path:
        logger.warning("context.event_path_unset")
        return {}

    path = Path(event_path)
    if not path.exists():
        logger.warning("context.event_path_missing", path=event_path)
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Could not read event payload {event_path}: {e}",
            {"path": event_path},
        ) from e

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid event payload in {event_path}: {e}",
            {"path": event_path},
        ) from e

    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Event payload in {event_path} is not a JSON object",
            {"path": event_path},
        )
    return payload


def _repository_coordinates(repository: str, event: GitHubEvent) -> tuple[str, str]:
    if repository:
        owner, _, repo = repository.partition("/")
        if owner and repo:
            return owner, repo

    if event.repository and event.repository.owner:
        return event.repository.owner.login, event.repository.name

    raise ConfigurationError(
        "Repository is unknown: set GITHUB_REPOSITORY like 'owner/repo'",
        {"github_repository": repository},
    )


def extract_context(
    payload: Mapping[str, Any],
    sha: str,
    repository: str = "",
) -> TriggerContext:
    """Derive the trigger facts from an event payload.

    Event kinds are decided by which top-level keys the payload carries, so a
    payload can be a commit and a release at once.

    Args:
        payload: The raw webhook payload
        sha: The triggering commit SHA (``GITHUB_SHA``)
        repository: ``owner/repo`` (``GITHUB_REPOSITORY``)

    Raises:
        ConfigurationError: If the payload is malformed or no repository
            can be determined
    """
    try:
        event = GitHubEvent.model_validate(dict(payload))
    except ValidationError as e:
        raise ConfigurationError(f"Unexpected event payload: {e}") from e

    is_commit = "head_commit" in payload
    is_pull_request = "pull_request" in payload
    is_release = "release" in payload

    owner, repo = _repository_coordinates(repository, event)
    pull_request = event.pull_request

    if event.issue is not None:
        issue_number = event.issue.number
    elif pull_request is not None:
        issue_number = pull_request.number
    else:
        issue_number = event.number

    return TriggerContext(
        sha=sha,
        owner=owner,
        repo=repo,
        is_commit=is_commit,
        is_pull_request=is_pull_request,
        is_release=is_release,
        commit_message=(
            event.head_commit.message if is_commit and event.head_commit else None
        ),
        pull_request_number=pull_request.number if pull_request else None,
        pull_request_title=(
            pull_request.title if is_pull_request and pull_request else None
        ),
        pull_request_head_sha=(
            pull_request.head.sha if pull_request and pull_request.head else None
        ),
        release_tag=event.release.tag_name if is_release and event.release else None,
        release_title=event.release.name if is_release and event.release else None,
        issue_number=issue_number,
    )
