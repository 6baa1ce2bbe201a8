"""Netlify deploy client.

Deploys a built site with the Netlify CLI and parses its JSON report.
"""

import asyncio
import json
import shlex

from pydantic import ValidationError

from netlify_action.core.exceptions import DeployError
from netlify_action.models.deployment import NetlifyDeploy, DeployRequest
from netlify_action.utils.logging import get_logger

# Characters of CLI output kept in errors and logs
OUTPUT_PREVIEW_CHARS = 1000


class NetlifyDeployer:
    """Runs ``netlify deploy`` for a site directory."""

    def __init__(self, cli: str = "netlify"):
        self.cli = shlex.split(cli)
        self.logger = get_logger("netlify")

    def build_command(self, request: DeployRequest) -> list[str]:
        """Build the CLI argument list for a deploy."""
        cmd = [
            *self.cli,
            "deploy",
            "--site", request.site_id,
            "--auth", request.auth_token,
            "--build",
            "--dir", str(request.site_dir),
        ]

        if not request.draft:
            cmd.append("--prod")

        if request.functions_dir:
            cmd.extend(["--functions", str(request.functions_dir)])

        cmd.extend(["--message", request.message, "--json"])
        return cmd

    async def deploy(self, request: DeployRequest) -> NetlifyDeploy:
        """Deploy once and return Netlify's deploy record.

        Raises:
            DeployError: If the CLI cannot be started, exits non-zero, or
                prints no usable deploy record
        """
        cmd = self.build_command(request)
        cmd_display = " ".join(shlex.quote(part) for part in cmd).replace(
            request.auth_token, "***"
        )

        self.logger.info(
            "netlify.deploy.started",
            site_id=request.site_id,
            draft=request.draft,
            cmd=cmd_display,
        )

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.logger.error("netlify.deploy.cli_unavailable", cli=self.cli[0], error=str(e))
            raise DeployError(f"Could not run the Netlify CLI ({self.cli[0]}): {e}") from e

        stdout, stderr = await process.communicate()

        stdout_text = stdout.decode(errors="replace") if stdout else ""
        stderr_text = stderr.decode(errors="replace") if stderr else ""

        self.logger.info(
            "netlify.deploy.output",
            returncode=process.returncode,
            stdout_len=len(stdout_text),
            stderr_len=len(stderr_text),
        )

        if process.returncode != 0:
            error_preview = (stderr_text or stdout_text)[:OUTPUT_PREVIEW_CHARS].replace(
                request.auth_token, "***"
            )
            self.logger.error(
                "netlify.deploy.failed",
                returncode=process.returncode,
                error_preview=error_preview,
            )
            raise DeployError(
                f"netlify deploy exited with status {process.returncode}",
                output=error_preview,
            )

        deploy = self._parse_deploy(stdout_text)

        self.logger.info("netlify.deploy.completed", deploy=deploy.model_dump(exclude_none=True))
        return deploy

    def _parse_deploy(self, output: str) -> NetlifyDeploy:
        """Parse the ``--json`` report printed by the CLI."""
        text = output.strip()
        if "{" not in text:
            raise DeployError(
                "Failed to deploy to Netlify: no deploy record in CLI output",
                output=text[:OUTPUT_PREVIEW_CHARS],
            )

        try:
            data = self._trailing_document(text)
            deploy = NetlifyDeploy.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise DeployError(
                f"Could not parse netlify deploy output: {e}",
                output=text[:OUTPUT_PREVIEW_CHARS],
            ) from e

        if deploy.is_empty():
            raise DeployError("Failed to deploy to Netlify: empty deploy record")

        return deploy

    @staticmethod
    def _trailing_document(text: str) -> object:
        """Decode the JSON document that ends the output.

        Build logs precede the report and may contain braces of their own,
        so only a document running to the end of the output counts.
        """
        decoder = json.JSONDecoder()
        error: json.JSONDecodeError | None = None
        start = text.find("{")
        while start != -1:
            try:
                data, end = decoder.raw_decode(text, start)
            except json.JSONDecodeError as e:
                error = e
            else:
                if end == len(text):
                    return data
            start = text.find("{", start + 1)

        raise error or json.JSONDecodeError("No JSON document at end of output", text, len(text))
