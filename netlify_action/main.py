"""Action entry point."""

import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from netlify_action import __version__
from netlify_action.config import Settings, get_settings
from netlify_action.core.context import extract_config, extract_context, load_event_payload
from netlify_action.core.exceptions import ConfigurationError
from netlify_action.core.orchestrator import DeployOrchestrator
from netlify_action.core.platform import ActionPlatform
from netlify_action.models.config import InputName
from netlify_action.services.github import GitHubClient
from netlify_action.services.netlify import NetlifyDeployer
from netlify_action.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def run_action(
    settings: Settings | None = None,
    platform: ActionPlatform | None = None,
    deployer: NetlifyDeployer | None = None,
    github: GitHubClient | None = None,
    cwd: Path | None = None,
) -> int:
    """Run the action once and return the process exit status."""
    settings = settings or get_settings()
    platform = platform or ActionPlatform.from_settings(settings)

    logger.info("action.starting", version=__version__)

    try:
        config = extract_config(platform.read_inputs(name.value for name in InputName))
        context = extract_context(
            load_event_payload(settings.github_event_path),
            sha=settings.github_sha,
            repository=settings.github_repository,
        )
    except ConfigurationError as e:
        logger.error("action.configuration_invalid", error=e.message)
        platform.fail(e)
        return 1
    except Exception as e:
        logger.exception("action.context_failed")
        platform.fail(e)
        return 1

    github = github or GitHubClient(
        config.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_request_timeout,
    )
    orchestrator = DeployOrchestrator(
        platform,
        deployer=deployer or NetlifyDeployer(settings.netlify_cli),
        github=github,
        cwd=cwd,
    )

    try:
        async with github:
            result = await orchestrator.run(context, config)
    except Exception as e:
        logger.exception("action.unhandled_exception")
        platform.fail(e)
        return 1

    logger.info("action.finished", success=result.success)
    return 1 if platform.failed else 0


def main() -> None:
    """Console script entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        # Logging is configured from these settings, so report without it
        ActionPlatform().fail(ConfigurationError(f"Invalid runner settings: {e}"))
        sys.exit(1)

    configure_logging(settings)
    sys.exit(asyncio.run(run_action(settings)))


if __name__ == "__main__":
    main()
