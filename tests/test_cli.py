"""
Tests for the command line entry point.
"""

import logging

import httpx
import pytest

from sprint_burnup import cli
from sprint_burnup.config import Config
from sprint_burnup.pipeline import BurnupPipeline

from helpers import ENV


@pytest.fixture
def fake_services(monkeypatch, services):
    """Route every pipeline built by the CLI through the fake APIs."""
    real_from_config = BurnupPipeline.from_config.__func__

    def from_config(cls, config, transport=None):
        return real_from_config(cls, config, transport=services.transport)

    monkeypatch.setattr(BurnupPipeline, "from_config", classmethod(from_config))
    return services


def error_lines(caplog) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.levelno >= logging.ERROR]


class TestRun:
    """Tests for cli.run."""

    @pytest.mark.asyncio
    async def test_success(self, fake_services, config, capsys):
        """Test a successful run prints the table and returns 0."""
        assert await cli.run(config) == 0

        out = capsys.readouterr().out
        assert "Cumulative Done" in out
        assert "S6" in out

    @pytest.mark.asyncio
    async def test_dry_run_prints_chart_url(self, fake_services, config, capsys):
        assert await cli.run(config, dry_run=True) == 0

        assert "https://quickchart.io/chart?c=" in capsys.readouterr().out
        assert fake_services.requests_to("/shapes") == []

    @pytest.mark.asyncio
    async def test_shape_failure_logs_one_error(self, fake_services, config, caplog):
        """Test a rejected shape is logged once with the response body and the chart is skipped."""
        fake_services.fail_shape_content = "Sprint"

        with caplog.at_level(logging.ERROR):
            assert await cli.run(config) == 1

        errors = error_lines(caplog)
        assert len(errors) == 1
        assert errors[0].startswith("Error:")
        assert "Rate limit exceeded" in errors[0]
        assert fake_services.requests_to("/images") == []

    @pytest.mark.asyncio
    async def test_non_json_response_logs_one_error(self, monkeypatch, config, caplog):
        """Test a login page served with 200 ends the run with one error line."""
        def handler(request):
            return httpx.Response(200, text="<html>Atlassian login</html>")

        real_from_config = BurnupPipeline.from_config.__func__
        monkeypatch.setattr(BurnupPipeline, "from_config", classmethod(
            lambda cls, cfg, transport=None: real_from_config(
                cls, cfg, transport=httpx.MockTransport(handler)
            )
        ))

        with caplog.at_level(logging.ERROR):
            assert await cli.run(config) == 1

        errors = error_lines(caplog)
        assert len(errors) == 1
        assert "Atlassian login" in errors[0]

    @pytest.mark.asyncio
    async def test_missing_config_logs_one_error(self, tmp_path, caplog):
        config = Config(str(tmp_path / "missing.yaml"), env={})

        with caplog.at_level(logging.ERROR):
            assert await cli.run(config) == 1

        errors = error_lines(caplog)
        assert len(errors) == 1
        assert "JIRA_BASE_URL" in errors[0]


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.build_parser().parse_args([])

        assert args.config == "config/config.yaml"
        assert args.closed_sprints is None
        assert not args.dry_run
        assert not args.verbose

    def test_options(self):
        args = cli.build_parser().parse_args(
            ["--config", "board.yaml", "--closed-sprints", "3", "--dry-run", "-v"]
        )

        assert args.config == "board.yaml"
        assert args.closed_sprints == 3
        assert args.dry_run
        assert args.verbose


class TestMain:
    """Tests for cli.main."""

    @pytest.fixture(autouse=True)
    def environment(self, monkeypatch, tmp_path):
        """Run from an empty directory with the board settings in the environment."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)
        for name, value in ENV.items():
            monkeypatch.setenv(name, value)

    def test_success_exit_code(self, fake_services, tmp_path):
        assert cli.main(["--config", str(tmp_path / "missing.yaml")]) == 0
        assert len(fake_services.requests_to("/images")) == 1

    def test_closed_sprints_option(self, fake_services, tmp_path, capsys):
        """Test --closed-sprints 2 selects two closed sprints plus the active one."""
        path = tmp_path / "config.yaml"
        path.write_text("report:\n")

        assert cli.main(["--config", str(path), "--closed-sprints", "2", "--dry-run"]) == 0

        issue_paths = [r.url.path for r in fake_services.requests_to("/issue")]
        assert issue_paths == [f"/rest/agile/1.0/sprint/{i}/issue" for i in (4, 5, 6)]

        table_lines = capsys.readouterr().out.splitlines()[2:5]
        rows = [line.split()[0] for line in table_lines]
        assert rows == ["S4", "S5", "S6"]

    def test_invalid_yaml_exit_code(self, fake_services, tmp_path):
        """Test an unreadable config file ends the run with exit code 1."""
        path = tmp_path / "config.yaml"
        path.write_text("jira: [unclosed\n")

        assert cli.main(["--config", str(path)]) == 1
        assert fake_services.requests == []

    def test_missing_settings_exit_code(self, fake_services, monkeypatch, tmp_path):
        monkeypatch.delenv("MIRO_TOKEN")

        assert cli.main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert fake_services.requests == []
