"""
Tests for the bundler adapter — subprocess.run is patched, no bundler needed.
"""

import subprocess
from unittest.mock import MagicMock, patch

from addgem.adapters.mock import MockInstaller
from addgem.adapters.shell.bundler import BundleInstaller
from addgem.core.models.gem import InstallOutcome

_RUN = "addgem.adapters.shell.bundler.subprocess.run"


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestBundleInstaller:
    def test_default_command(self):
        assert BundleInstaller().command == ["bundle", "install"]
        assert BundleInstaller().describe() == "bundle install"

    def test_success(self):
        with patch(_RUN, return_value=_completed(stdout="Bundle complete!\n")) as run:
            outcome = BundleInstaller(cwd="/proj").run()
        assert outcome.succeeded
        assert outcome.stdout == "Bundle complete!\n"
        assert outcome.return_code == 0
        args, kwargs = run.call_args
        assert args[0] == ["bundle", "install"]
        assert kwargs["cwd"] == "/proj"
        assert kwargs["capture_output"] is True

    def test_nonzero_exit_uses_stderr(self):
        with patch(_RUN, return_value=_completed(5, stderr="Could not find gem 'x'\n")):
            outcome = BundleInstaller().run()
        assert outcome.failed
        assert outcome.error == "Could not find gem 'x'"
        assert outcome.return_code == 5

    def test_nonzero_exit_without_stderr(self):
        with patch(_RUN, return_value=_completed(7)):
            outcome = BundleInstaller().run()
        assert outcome.failed
        assert outcome.error == "Command exited with code 7"

    def test_stderr_with_zero_exit_is_not_success(self):
        with patch(_RUN, return_value=_completed(0, stdout="ok\n", stderr="warning: x\n")):
            outcome = BundleInstaller().run()
        assert outcome.status == "stderr"
        assert not outcome.succeeded
        assert not outcome.failed
        assert outcome.stdout == "ok\n"

    def test_launch_failure(self):
        with patch(_RUN, side_effect=FileNotFoundError("No such file or directory: 'bundle'")):
            outcome = BundleInstaller().run()
        assert outcome.failed
        assert "bundle" in outcome.error
        assert outcome.return_code is None

    def test_timeout(self):
        with patch(_RUN, side_effect=subprocess.TimeoutExpired(["bundle", "install"], 30)):
            outcome = BundleInstaller(timeout=30).run()
        assert outcome.failed
        assert "timed out after 30s" in outcome.error

    def test_custom_command(self):
        with patch(_RUN, return_value=_completed()) as run:
            BundleInstaller(["bundle", "install", "--quiet"]).run()
        assert run.call_args.args[0] == ["bundle", "install", "--quiet"]


class TestMockInstaller:
    def test_default_success(self):
        mock = MockInstaller()
        assert mock.run().succeeded
        assert mock.call_count == 1

    def test_canned_failure(self):
        mock = MockInstaller(InstallOutcome(status="failed", error="boom"))
        outcome = mock.run()
        assert outcome.failed
        assert outcome.command == ["mock", "install"]
