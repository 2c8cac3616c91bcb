"""
Tests for the command line interface.
"""

import pytest
from click.testing import CliRunner

import screen_capture.cli as cli_module
from screen_capture import __version__
from screen_capture.capture import ScreenCapture
from screen_capture.config import CaptureConfig


@pytest.fixture
def runner(monkeypatch, backend_factory, provider_factory, two_displays):
    """CliRunner wired to a fake backend and two displays."""
    backends = []

    def _capture(config):
        backend = backend_factory(fail_origins={(5000, 5000)})
        backends.append(backend)
        return ScreenCapture(
            backend=backend,
            provider=provider_factory(two_displays),
            config=config,
        )

    monkeypatch.setattr(cli_module, "ScreenCapture", _capture)
    monkeypatch.setattr(cli_module, "load_config", lambda path=None: CaptureConfig())
    monkeypatch.setattr(cli_module, "setup_logging", lambda **kwargs: None)

    cli_runner = CliRunner()
    cli_runner.backends = backends
    return cli_runner


class TestCli:
    """Tests for CLI commands."""

    def test_version(self, runner):
        result = runner.invoke(cli_module.main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_displays(self, runner):
        result = runner.invoke(cli_module.main, ["displays"])
        assert result.exit_code == 0
        assert "1 (primary)" in result.output
        assert "1920,0 1280x1024" in result.output

    def test_grab(self, runner):
        result = runner.invoke(cli_module.main, ["grab", "--display", "2"])
        assert result.exit_code == 0
        assert "1280x1024" in result.output

    def test_area_padded(self, runner):
        result = runner.invoke(cli_module.main, ["area", "--", "-5", "-5", "20", "20"])
        assert result.exit_code == 0
        assert "20x20" in result.output

    def test_area_unknown_display(self, runner):
        result = runner.invoke(cli_module.main, ["area", "0", "0", "10", "10", "-d", "9"])
        assert result.exit_code == 2
        assert "Unknown display" in result.output

    def test_area_nothing_captured(self, runner):
        result = runner.invoke(cli_module.main, ["area", "5000", "5000", "10", "10"])
        assert result.exit_code == 1
        assert "nothing captured" in result.output

    def test_color(self, runner):
        result = runner.invoke(cli_module.main, ["color", "1", "2"])
        assert result.exit_code == 0
        assert "#010207ff" in result.output

    def test_all(self, runner):
        result = runner.invoke(cli_module.main, ["all"])
        assert result.exit_code == 0
        assert "3200x1080" in result.output
        assert "offset" in result.output
