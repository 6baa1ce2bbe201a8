"""Deploy configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InputName(str, Enum):
    """Action input names, as declared in action.yml."""

    GITHUB_TOKEN = "github-token"
    NETLIFY_AUTH_TOKEN = "netlify-auth-token"
    NETLIFY_SITE_ID = "netlify-site-id"
    BUILD_DIR = "build-dir"
    FUNCTIONS_DIR = "functions-dir"
    MESSAGE = "message"
    DRAFT = "draft"
    DRY_RUN = "dry-run"
    COMMENT_ON_COMMIT = "comment-on-commit"
    COMMENT_ON_PULL_REQUEST = "comment-on-pull-request"
    DEPLOYMENT_ENVIRONMENT = "github-deployment-environment"
    DEPLOYMENT_DESCRIPTION = "github-deployment-description"
    DEPLOYMENT_IS_TRANSIENT = "github-deployment-is-transient"
    DEPLOYMENT_IS_PRODUCTION = "github-deployment-is-production"
    DEPLOYMENT_REPORT_STATUS = "github-deployment-should-report-status"


REQUIRED_INPUTS = (
    InputName.GITHUB_TOKEN,
    InputName.NETLIFY_AUTH_TOKEN,
    InputName.NETLIFY_SITE_ID,
    InputName.BUILD_DIR,
)


class DeployConfig(BaseModel):
    """Validated action inputs for one run."""

    model_config = ConfigDict(frozen=True)

    # Required
    github_token: str = Field(repr=False)
    netlify_auth_token: str = Field(repr=False)
    site_id: str
    build_dir: str

    # Optional
    functions_dir: str | None = None
    message: str | None = None
    deploy_environment: str | None = None
    deploy_description: str | None = None

    # Flags
    draft: bool = False
    dry_run: bool = False
    comment_on_commit: bool = False
    comment_on_pull_request: bool = False
    deploy_is_transient: bool = False
    deploy_is_production: bool = False
    report_deployment_status: bool = False
