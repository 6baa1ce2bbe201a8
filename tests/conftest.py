"""Pytest configuration and fixtures."""

import io
from typing import Any

import pytest

from netlify_action.core.exceptions import DeployError
from netlify_action.core.platform import ActionPlatform
from netlify_action.models.config import DeployConfig
from netlify_action.models.context import TriggerContext
from netlify_action.models.deployment import DeployRequest, NetlifyDeploy

SHA = "abc1234def5678abc1234def5678abc1234def56"
HEAD_SHA = "fedcba9876543210fedcba9876543210fedcba98"


class FakeGitHub:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(self, fail_on: dict[str, Exception] | None = None):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on = fail_on or {}
        self.closed = False

    async def __aenter__(self) -> "FakeGitHub":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append((method, kwargs))
        if method in self.fail_on:
            raise self.fail_on[method]

    async def create_commit_comment(self, owner, repo, commit_sha, body):
        self._record("create_commit_comment", owner=owner, repo=repo, commit_sha=commit_sha, body=body)
        return {"id": 1}

    async def create_issue_comment(self, owner, repo, issue_number, body):
        self._record("create_issue_comment", owner=owner, repo=repo, issue_number=issue_number, body=body)
        return {"id": 2}

    async def create_deployment(self, owner, repo, **kwargs):
        self._record("create_deployment", owner=owner, repo=repo, **kwargs)
        return {"id": 42}

    async def create_deployment_status(self, owner, repo, **kwargs):
        self._record("create_deployment_status", owner=owner, repo=repo, **kwargs)
        return {"id": 3}

    async def create_commit_status(self, owner, repo, **kwargs):
        self._record("create_commit_status", owner=owner, repo=repo, **kwargs)
        return {"id": 4}


class FakeDeployer:
    """Stand-in for NetlifyDeployer returning a fixed record or error."""

    def __init__(self, deploy: NetlifyDeploy | None = None, error: DeployError | None = None):
        self.deploy_record = deploy
        self.error = error
        self.requests: list[DeployRequest] = []

    async def deploy(self, request: DeployRequest) -> NetlifyDeploy:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.deploy_record


@pytest.fixture
def platform() -> ActionPlatform:
    """Platform writing to in-memory streams."""
    return ActionPlatform(environ={}, stdout=io.StringIO(), stderr=io.StringIO())


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def make_github():
    """Factory for fake GitHub clients that fail on chosen methods."""

    def _make(**fail_on: Exception) -> FakeGitHub:
        return FakeGitHub(fail_on=fail_on)

    return _make


@pytest.fixture
def make_deployer():
    """Factory for fake deployers."""

    def _make(deploy: NetlifyDeploy | None = None, error: DeployError | None = None) -> FakeDeployer:
        return FakeDeployer(deploy=deploy, error=error)

    return _make


@pytest.fixture
def netlify_deploy() -> NetlifyDeploy:
    """Deploy record shaped like the Netlify CLI's ``--json`` output."""
    return NetlifyDeploy(
        site_id="site-123",
        site_name="site-x",
        deploy_id="dep-1",
        name="site-x",
        ssl_url="https://site-x.com",
        deploy_url="https://dep-1--site-x.netlify.app",
        deploy_ssl_url="https://dep-1--site-x.netlify.app",
    )


@pytest.fixture
def commit_context() -> TriggerContext:
    return TriggerContext(
        sha=SHA,
        owner="octo",
        repo="site",
        is_commit=True,
        commit_message="fix bug",
    )


@pytest.fixture
def pull_request_context() -> TriggerContext:
    return TriggerContext(
        sha=SHA,
        owner="octo",
        repo="site",
        is_pull_request=True,
        pull_request_number=7,
        pull_request_title="Add page",
        pull_request_head_sha=HEAD_SHA,
        issue_number=7,
    )


@pytest.fixture
def make_config():
    """Factory for deploy configs with the required inputs filled in."""

    def _make(**overrides) -> DeployConfig:
        values = {
            "github_token": "gh-token",
            "netlify_auth_token": "nf-token",
            "site_id": "site-123",
            "build_dir": "dist",
        }
        values.update(overrides)
        return DeployConfig(**values)

    return _make

