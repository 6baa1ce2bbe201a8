"""Deployment data models."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from netlify_action.models.config import DeployConfig


class DeployRequest(BaseModel):
    """Input for one Netlify deploy."""

    model_config = ConfigDict(frozen=True)

    site_id: str
    auth_token: str = Field(repr=False)
    site_dir: Path
    functions_dir: Path | None = None
    message: str
    draft: bool = False

    @classmethod
    def from_config(
        cls,
        config: DeployConfig,
        message: str,
        cwd: Path | None = None,
    ) -> "DeployRequest":
        """Resolve the configured directories against the working directory."""
        base = cwd or Path.cwd()
        functions_dir = None
        if config.functions_dir:
            functions_dir = Path(os.path.abspath(base / config.functions_dir))
        return cls(
            site_id=config.site_id,
            auth_token=config.netlify_auth_token,
            site_dir=Path(os.path.abspath(base / config.build_dir)),
            functions_dir=functions_dir,
            message=message,
            draft=config.draft,
        )


class NetlifyDeploy(BaseModel):
    """Deploy record returned by Netlify.

    The CLI's ``--json`` output and the API's deploy object name the same
    things differently, so every field is optional and the accessors below
    pick whichever is present.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    deploy_id: str | None = None
    site_id: str | None = None
    site_name: str | None = None
    name: str | None = None
    state: str | None = None

    url: str | None = None
    ssl_url: str | None = None
    deploy_url: str | None = None
    deploy_ssl_url: str | None = None
    admin_url: str | None = None
    logs: str | None = None

    @property
    def display_name(self) -> str | None:
        return self.name or self.site_name

    @property
    def production_url(self) -> str | None:
        return self.ssl_url or self.url

    @property
    def draft_url(self) -> str | None:
        return self.deploy_ssl_url or self.deploy_url

    @property
    def preview_name(self) -> str | None:
        """Value of the ``preview-name`` output."""
        return self.site_name or self.name

    @property
    def preview_url(self) -> str | None:
        """Value of the ``preview-url`` output."""
        return self.deploy_url or self.deploy_ssl_url

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


# Stands in for a real deploy record during dry runs
DRY_RUN_DEPLOY = NetlifyDeploy(
    name="dry-run",
    ssl_url="http://example.com",
    deploy_ssl_url="http://example.com",
)


class RunResult(BaseModel):
    """Outcome of one orchestrated run."""

    deploy_message: str
    notification_body: str | None = None
    deploy: NetlifyDeploy | None = None
    failures: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.deploy is not None and not self.failures
