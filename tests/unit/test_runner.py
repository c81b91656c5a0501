"""Tests for the command Runner and the BuildInvoker."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relaypub.core.builder import BuildInvoker
from relaypub.core.errors import BuildFailed, BuildScriptMissing
from relaypub.core.runner import COMMAND_NOT_FOUND, Runner, SubprocessRunner


class TestSubprocessRunner:
    def test_satisfies_protocol(self):
        assert isinstance(SubprocessRunner(), Runner)

    def test_success(self):
        result = SubprocessRunner().execute(sys.executable, ["-c", "pass"])
        assert result.ok
        assert result.command[0] == sys.executable

    def test_exit_status_reported(self):
        result = SubprocessRunner().execute(sys.executable, ["-c", "raise SystemExit(3)"])
        assert result.returncode == 3
        assert not result.ok

    def test_missing_executable(self, tmp_path: Path):
        result = SubprocessRunner().execute(str(tmp_path / "no-such-binary"), [])
        assert result.returncode == COMMAND_NOT_FOUND


class TestBuildInvoker:
    def test_runs_script_with_version(self, tmp_path: Path, runner):
        script = tmp_path / "build-all.sh"
        script.write_text("exit 0\n")
        BuildInvoker(script, runner).build("1.4.0")
        assert runner.calls == [("bash", str(script), "1.4.0")]

    def test_missing_script(self, tmp_path: Path, runner):
        with pytest.raises(BuildScriptMissing, match="build-all.sh"):
            BuildInvoker(tmp_path / "build-all.sh", runner).build("1.0.0")
        assert runner.calls == []

    def test_directory_is_not_a_script(self, tmp_path: Path, runner):
        with pytest.raises(BuildScriptMissing):
            BuildInvoker(tmp_path, runner).build("1.0.0")

    def test_nonzero_exit_is_build_failed(self, tmp_path: Path, runner):
        script = tmp_path / "build-all.sh"
        script.write_text("exit 2\n")
        runner.fail_matching("build-all.sh", returncode=2)
        with pytest.raises(BuildFailed, match="exit status 2"):
            BuildInvoker(script, runner).build("1.0.0")
