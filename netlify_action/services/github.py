"""GitHub REST API client.

Covers the handful of endpoints the action reports through: commit
comments, issue comments, deployments, deployment statuses and commit
statuses.
"""

from typing import Any

import httpx

from netlify_action import __version__
from netlify_action.core.exceptions import GitHubAPIError
from netlify_action.utils.logging import get_logger

API_VERSION = "2022-11-28"


class GitHubClient:
    """Async client for the GitHub REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.logger = get_logger("github")
        self._http_client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"netlify-deploy-action/{__version__}",
            },
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.logger.debug("github.request", method="POST", path=path)

        response = await self._http_client.post(path, json=payload)

        if response.is_error:
            raise GitHubAPIError(
                response.status_code,
                self._error_message(response),
                url=str(response.request.url),
            )

        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"GitHub API returned {response.status_code} {response.reason_phrase}".strip()

    async def create_commit_comment(
        self, owner: str, repo: str, commit_sha: str, body: str
    ) -> dict[str, Any]:
        return await self._post(
            f"/repos/{owner}/{repo}/commits/{commit_sha}/comments",
            {"body": body},
        )

    async def create_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Comment on an issue or pull request conversation."""
        return await self._post(
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            {"body": body},
        )

    async def create_deployment(
        self,
        owner: str,
        repo: str,
        ref: str,
        environment: str,
        description: str | None = None,
        transient_environment: bool = False,
        production_environment: bool = False,
    ) -> dict[str, Any]:
        """Create a deployment record.

        Merging the default branch and required status checks are both
        disabled, so GitHub creates the deployment for ``ref`` as is.

        Raises:
            GitHubAPIError: On an error status, or when GitHub answers
                without creating a deployment
        """
        payload: dict[str, Any] = {
            "ref": ref,
            "auto_merge": False,
            "required_contexts": [],
            "environment": environment,
            "transient_environment": transient_environment,
            "production_environment": production_environment,
        }
        if description is not None:
            payload["description"] = description

        deployment = await self._post(f"/repos/{owner}/{repo}/deployments", payload)

        if "id" not in deployment:
            raise GitHubAPIError(
                202,
                deployment.get("message") or "GitHub did not create a deployment",
            )
        return deployment

    async def create_deployment_status(
        self,
        owner: str,
        repo: str,
        deployment_id: int,
        state: str,
        environment_url: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"state": state}
        if environment_url:
            payload["environment_url"] = environment_url
        return await self._post(
            f"/repos/{owner}/{repo}/deployments/{deployment_id}/statuses",
            payload,
        )

    async def create_commit_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        state: str,
        context: str,
        target_url: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"state": state, "context": context}
        if target_url:
            payload["target_url"] = target_url
        if description:
            payload["description"] = description
        return await self._post(f"/repos/{owner}/{repo}/statuses/{sha}", payload)
