"""Deploy message and notification body composition.

Everything here is pure: the same inputs always give the same string.
"""

from netlify_action.models.context import TriggerContext
from netlify_action.models.deployment import NetlifyDeploy


def compose_deploy_message(
    context: TriggerContext,
    explicit_message: str | None = None,
) -> str:
    """Build the description Netlify stores with the deploy.

    A non-blank explicit message is returned unchanged. Otherwise the most
    specific event kind wins: release, then pull request, then commit.
    """
    if explicit_message and explicit_message.strip():
        return explicit_message

    if context.is_release:
        return f"Release: {context.release_title or ''} [{context.release_tag or ''}]"
    if context.is_pull_request:
        return f"PR: {context.pull_request_title or ''} [{context.sha_short}]"
    if context.is_commit:
        return f"Commit: {context.commit_message or ''} [{context.sha_short}]"
    return f"Build [{context.sha_short}]"


def select_deploy_url(is_draft: bool, deploy: NetlifyDeploy) -> str:
    """URL a draft or production deploy is reachable at."""
    url = deploy.draft_url if is_draft else deploy.production_url
    return url or ""


def compose_notification_body(is_draft: bool, deploy: NetlifyDeploy) -> str:
    """Build the text posted to every GitHub notification target."""
    name = deploy.display_name or ""
    url = select_deploy_url(is_draft, deploy)
    if is_draft:
        return f"🚀 [DRAFT] deployed **{name}**: {url}"
    return f"🎉 [PROD] deployed **{name}**: {url}"
