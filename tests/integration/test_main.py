"""Integration tests for the action entry point."""

import io
import json
from pathlib import Path

import pytest

from netlify_action.config import Settings, get_settings
from netlify_action.core.platform import ActionPlatform
from netlify_action.main import main, run_action
from netlify_action.models.deployment import NetlifyDeploy

SHA = "abc1234def5678abc1234def5678abc1234def56"

INPUTS = {
    "INPUT_GITHUB-TOKEN": "gh-token",
    "INPUT_NETLIFY-AUTH-TOKEN": "nf-token",
    "INPUT_NETLIFY-SITE-ID": "site-123",
    "INPUT_BUILD-DIR": "dist",
}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"head_commit": {"id": SHA, "message": "fix bug"}}))
    return Settings(
        github_event_path=str(event_path),
        github_sha=SHA,
        github_repository="octo/site",
        github_output=str(tmp_path / "github_output"),
    )


def make_platform(settings: Settings, environ: dict[str, str]) -> ActionPlatform:
    return ActionPlatform.from_settings(
        settings, environ=environ, stdout=io.StringIO(), stderr=io.StringIO()
    )


class TestRunAction:
    """Tests for run_action."""

    @pytest.mark.asyncio
    async def test_missing_inputs_fail_before_deploy(
        self, settings: Settings, github, make_deployer
    ):
        platform = make_platform(settings, {"INPUT_BUILD-DIR": "dist"})
        deployer = make_deployer(NetlifyDeploy(name="site-x"))

        exit_code = await run_action(settings, platform, deployer=deployer, github=github)

        assert exit_code == 1
        assert deployer.requests == []
        assert github.calls == []
        assert len(platform.failures) == 1
        assert "github-token" in platform.failures[0]
        assert "netlify-site-id" in platform.failures[0]
        assert "build-dir" not in platform.failures[0]

    @pytest.mark.asyncio
    async def test_successful_run(self, settings: Settings, github, make_deployer, tmp_path: Path):
        environ = {**INPUTS, "INPUT_COMMENT-ON-COMMIT": "true"}
        platform = make_platform(settings, environ)
        deployer = make_deployer(
            NetlifyDeploy(
                name="site-x",
                site_name="site-x",
                ssl_url="https://site-x.com",
                deploy_url="https://dep--site-x.netlify.app",
            )
        )

        exit_code = await run_action(
            settings, platform, deployer=deployer, github=github, cwd=tmp_path
        )

        assert exit_code == 0
        assert github.closed is True
        assert github.calls_to("create_commit_comment")[0]["body"] == (
            "🎉 [PROD] deployed **site-x**: https://site-x.com"
        )
        output = Path(settings.github_output).read_text()
        assert "preview-name<<" in output
        assert "https://dep--site-x.netlify.app" in output

    @pytest.mark.asyncio
    async def test_notification_failure_exit_code(
        self, settings: Settings, make_github, make_deployer
    ):
        environ = {**INPUTS, "INPUT_COMMENT-ON-COMMIT": "true"}
        platform = make_platform(settings, environ)
        github = make_github(create_commit_comment=RuntimeError("socket closed"))

        exit_code = await run_action(
            settings, platform, deployer=make_deployer(NetlifyDeploy(name="site-x")), github=github
        )

        assert exit_code == 1
        assert platform.failures == ["socket closed"]
        assert "::error::socket closed" in platform.stdout.getvalue()

    @pytest.mark.asyncio
    async def test_dry_run_without_network(self, settings: Settings, github, make_deployer):
        environ = {
            **INPUTS,
            "INPUT_DRY-RUN": "true",
            "INPUT_COMMENT-ON-COMMIT": "true",
        }
        platform = make_platform(settings, environ)
        deployer = make_deployer(NetlifyDeploy(name="unused"))

        exit_code = await run_action(settings, platform, deployer=deployer, github=github)

        assert exit_code == 0
        assert deployer.requests == []
        assert github.calls == []
        stdout = platform.stdout.getvalue()
        assert '[Dry run] Netlify deploy message: "Commit: fix bug [abc1234]"' in stdout
        assert "[Dry run] GitHub commit comment" in stdout
        assert not Path(settings.github_output).exists()

    @pytest.mark.asyncio
    async def test_invalid_event_payload(self, settings: Settings, github, make_deployer):
        Path(settings.github_event_path).write_text("not json")
        platform = make_platform(settings, INPUTS)
        deployer = make_deployer(NetlifyDeploy(name="site-x"))

        exit_code = await run_action(settings, platform, deployer=deployer, github=github)

        assert exit_code == 1
        assert deployer.requests == []
        assert "Invalid event payload" in platform.failures[0]

    @pytest.mark.asyncio
    async def test_undecodable_event_payload(self, settings: Settings, github, make_deployer):
        """Test a non UTF-8 event file is reported instead of raised."""
        Path(settings.github_event_path).write_bytes(b'{"head_commit": {"message": "\xff\xfe"}}')
        platform = make_platform(settings, INPUTS)
        deployer = make_deployer(NetlifyDeploy(name="site-x"))

        exit_code = await run_action(settings, platform, deployer=deployer, github=github)

        assert exit_code == 1
        assert deployer.requests == []
        assert github.calls == []
        assert "Could not read event payload" in platform.failures[0]
        assert "::error::Could not read event payload" in platform.stdout.getvalue()

    @pytest.mark.asyncio
    async def test_unexpected_extraction_error(
        self, settings: Settings, github, make_deployer, monkeypatch
    ):
        def broken_payload(path):
            raise RuntimeError("event store unavailable")

        monkeypatch.setattr("netlify_action.main.load_event_payload", broken_payload)
        platform = make_platform(settings, INPUTS)

        exit_code = await run_action(
            settings, platform, deployer=make_deployer(NetlifyDeploy(name="site-x")), github=github
        )

        assert exit_code == 1
        assert platform.failures == ["event store unavailable"]
        assert github.calls == []


class TestMain:
    """Tests for the console script entry point."""

    def test_invalid_settings_are_reported(self, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        get_settings.cache_clear()

        try:
            with pytest.raises(SystemExit) as exc_info:
                main()
        finally:
            get_settings.cache_clear()

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "::error::Invalid runner settings" in captured.out
        assert "ConfigurationError" in captured.err
