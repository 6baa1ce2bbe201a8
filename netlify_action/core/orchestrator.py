"""Deploy orchestrator.

Runs one deploy and reports it back to GitHub.
"""

from pathlib import Path

from netlify_action.core.exceptions import DeployError
from netlify_action.core.messages import (
    compose_deploy_message,
    compose_notification_body,
    select_deploy_url,
)
from netlify_action.core.platform import ActionPlatform
from netlify_action.models.config import DeployConfig
from netlify_action.models.context import TriggerContext
from netlify_action.models.deployment import (
    DRY_RUN_DEPLOY,
    DeployRequest,
    NetlifyDeploy,
    RunResult,
)
from netlify_action.services.github import GitHubClient
from netlify_action.services.netlify import NetlifyDeployer
from netlify_action.services.notifier import Notifier
from netlify_action.utils.logging import get_logger

PREVIEW_NAME_OUTPUT = "preview-name"
PREVIEW_URL_OUTPUT = "preview-url"


class DeployOrchestrator:
    """Orchestrates the deploy-and-notify flow.

    Steps, each awaited before the next:
    1. compose the deploy message (unless one was given)
    2. deploy to Netlify, or substitute a placeholder on dry runs
    3. compose the notification body
    4. notify GitHub

    A failed deploy stops the run before any notification is attempted.
    """

    def __init__(
        self,
        platform: ActionPlatform,
        deployer: NetlifyDeployer | None = None,
        github: GitHubClient | None = None,
        cwd: Path | None = None,
    ):
        self.platform = platform
        self.deployer = deployer or NetlifyDeployer()
        self.github = github
        self.cwd = cwd
        self.logger = get_logger("orchestrator")

    async def run(self, context: TriggerContext, config: DeployConfig) -> RunResult:
        """Run the deploy and the notifications for one event.

        Args:
            context: Facts about the triggering event
            config: Validated action inputs

        Returns:
            The run outcome; failures have already been reported on the
            platform
        """
        message = compose_deploy_message(context, config.message)
        result = RunResult(deploy_message=message)

        self.logger.info(
            "orchestrator.run.started",
            sha=context.sha,
            event_kinds=sorted(kind.value for kind in context.event_kinds),
            draft=config.draft,
            dry_run=config.dry_run,
        )

        if config.dry_run:
            self.platform.write_dry_run(
                "Action is running dry - there won't be any outputs from this run."
            )

        deploy = await self._deploy(config, message)
        if deploy is None:
            result.failures = list(self.platform.failures)
            return result

        result.deploy = deploy
        body = compose_notification_body(config.draft, deploy)
        result.notification_body = body

        if config.dry_run:
            self.platform.write_dry_run(f'Notification body: "{body}"')

        notifier = Notifier(self.platform, self.github, dry_run=config.dry_run)
        await notifier.notify(context, config, body, select_deploy_url(config.draft, deploy))

        result.failures = list(self.platform.failures)

        self.logger.info(
            "orchestrator.run.completed",
            success=result.success,
            failures=len(result.failures),
        )
        return result

    async def _deploy(self, config: DeployConfig, message: str) -> NetlifyDeploy | None:
        """Deploy once; ``None`` means the failure was already reported."""
        target = "draft " if config.draft else ""

        if config.dry_run:
            self.platform.write_dry_run(f"Deploying {target}to Netlify...")
            self.platform.write_dry_run(f'Netlify deploy message: "{message}"')
            return DRY_RUN_DEPLOY

        self.platform.write(f"Deploying {target}to Netlify...")
        request = DeployRequest.from_config(config, message, cwd=self.cwd)

        try:
            deploy = await self.deployer.deploy(request)
        except DeployError as e:
            self.logger.error("orchestrator.deploy.failed", error=e.message)
            self.platform.fail(e, label="netlify deploy command failed")
            return None

        self.platform.report_output(PREVIEW_NAME_OUTPUT, deploy.preview_name or "")
        self.platform.report_output(PREVIEW_URL_OUTPUT, deploy.preview_url or "")
        return deploy
