"""GitHub notifications for a finished deploy.

Each notification is guarded by its own condition and isolated from the
others: a failing call is reported and the remaining calls still run.
"""

from netlify_action.core.exceptions import NotificationError
from netlify_action.core.platform import ActionPlatform
from netlify_action.models.config import DeployConfig
from netlify_action.models.context import TriggerContext
from netlify_action.services.github import GitHubClient
from netlify_action.utils.logging import get_logger

COMMIT_STATUS_CONTEXT = "action-netlify-deploy"
COMMIT_STATUS_DESCRIPTION = "action-netlify-deploy status"


class Notifier:
    """Reports a deploy back to GitHub."""

    def __init__(
        self,
        platform: ActionPlatform,
        github: GitHubClient | None,
        dry_run: bool = False,
    ):
        if github is None and not dry_run:
            raise ValueError("A GitHub client is required unless running dry")
        self.platform = platform
        self.github = github
        self.dry_run = dry_run
        self.logger = get_logger("notifier")
        self.errors: list[NotificationError] = []

    async def notify(
        self,
        context: TriggerContext,
        config: DeployConfig,
        body: str,
        deploy_url: str,
    ) -> list[NotificationError]:
        """Issue every notification the configuration asks for.

        Args:
            context: Facts about the triggering event
            config: Validated action inputs
            body: Notification text, shared by all comments
            deploy_url: Draft or production URL of the deploy

        Returns:
            The errors of the calls that failed, in call order
        """
        self.errors = []

        if context.is_commit and config.comment_on_commit:
            await self._comment_on_commit(context, body)

        if (
            config.comment_on_pull_request
            and context.is_pull_request
            and context.issue_number is not None
        ):
            await self._comment_on_pull_request(context, body)
        elif config.comment_on_pull_request:
            self.logger.info(
                "notifier.pull_request_comment.skipped",
                reason=(
                    "pull request number unknown"
                    if context.is_pull_request
                    else "not a pull request event"
                ),
            )

        if config.deploy_environment:
            await self._create_deployment(context, config, deploy_url)

            if config.report_deployment_status:
                await self._create_commit_status(context, deploy_url)

        return list(self.errors)

    def _record_failure(self, action: str, error: Exception) -> None:
        wrapped = NotificationError(
            action,
            getattr(error, "message", None) or str(error),
            cause=error,
        )
        self.errors.append(wrapped)
        self.logger.error(f"notifier.{action}.failed", error=wrapped.message)
        self.platform.fail(wrapped, label=f"creating {action.replace('_', ' ')} failed")

    async def _comment_on_commit(self, context: TriggerContext, body: str) -> None:
        if self.dry_run:
            self.platform.write_dry_run(
                f'GitHub commit comment on {context.sha_short} (SHA: {context.sha}): "{body}"'
            )
            return

        self.platform.write(
            f"Commenting on commit {context.sha_short} (SHA: {context.sha})"
        )
        try:
            await self.github.create_commit_comment(
                context.owner, context.repo, context.sha, body
            )
        except Exception as e:
            self._record_failure("commit_comment", e)
            return

        self.logger.info("notifier.commit_comment.created", sha=context.sha)

    async def _comment_on_pull_request(self, context: TriggerContext, body: str) -> None:
        if self.dry_run:
            self.platform.write_dry_run(
                f'GitHub pull request comment on #{context.issue_number}: "{body}"'
            )
            return

        self.platform.write(f"Commenting on pull request #{context.issue_number}")
        try:
            await self.github.create_issue_comment(
                context.owner, context.repo, context.issue_number, body
            )
        except Exception as e:
            self._record_failure("pull_request_comment", e)
            return

        self.logger.info(
            "notifier.pull_request_comment.created",
            issue_number=context.issue_number,
        )

    async def _create_deployment(
        self,
        context: TriggerContext,
        config: DeployConfig,
        deploy_url: str,
    ) -> None:
        environment = config.deploy_environment
        if self.dry_run:
            self.platform.write_dry_run(
                f'GitHub deployment env: "{environment}" on "{context.deployment_sha}"'
            )
            self.platform.write_dry_run(
                f'GitHub deployment status "success" with URL "{deploy_url}"'
            )
            return

        self.platform.write(f'Creating deployment for "{environment}"')
        try:
            deployment = await self.github.create_deployment(
                context.owner,
                context.repo,
                ref=context.deployment_sha,
                environment=environment,
                description=config.deploy_description,
                transient_environment=config.deploy_is_transient,
                production_environment=config.deploy_is_production,
            )
        except Exception as e:
            # The deployment status needs the id of the created deployment
            self._record_failure("deployment", e)
            return

        self.logger.info(
            "notifier.deployment.created",
            deployment_id=deployment["id"],
            environment=environment,
        )

        try:
            await self.github.create_deployment_status(
                context.owner,
                context.repo,
                deployment_id=deployment["id"],
                state="success",
                environment_url=deploy_url,
            )
        except Exception as e:
            self._record_failure("deployment_status", e)

    async def _create_commit_status(self, context: TriggerContext, deploy_url: str) -> None:
        sha = context.deployment_sha
        if self.dry_run:
            self.platform.write_dry_run(
                f'GitHub commit status "success" on "{sha}" with URL "{deploy_url}"'
            )
            return

        self.platform.write(f'Creating commit status for SHA: "{sha}"')
        try:
            await self.github.create_commit_status(
                context.owner,
                context.repo,
                sha=sha,
                state="success",
                context=COMMIT_STATUS_CONTEXT,
                target_url=deploy_url,
                description=COMMIT_STATUS_DESCRIPTION,
            )
        except Exception as e:
            self._record_failure("commit_status", e)
            return

        self.logger.info("notifier.commit_status.created", sha=sha)
