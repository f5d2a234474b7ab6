"""Tests for command running and terminal actions."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from wt_cli.core.process import (
    ReplaceProcess,
    RunCommand,
    SpawnDetached,
    format_argv,
    perform,
    run_command,
)
from wt_cli.errors import ToolNotFoundError


def test_format_argv() -> None:
    """Arguments are shell-quoted."""
    assert format_argv(["git", "commit", "-m", "a b", Path("/x y")]) == "git commit -m 'a b' '/x y'"


class TestRunCommand:
    """Tests for run_command function."""

    def test_captures_text(self) -> None:
        """Output is captured as text and failures are not raised."""
        with patch("subprocess.run", return_value=MagicMock(returncode=1)) as mock_run:
            result = run_command(["git", "status"], cwd=Path("/repo"))
        assert result.returncode == 1
        mock_run.assert_called_once_with(
            ["git", "status"],
            cwd=Path("/repo"),
            capture_output=True,
            text=True,
            check=False,
            env=None,
        )

    def test_missing_executable(self) -> None:
        """A missing program becomes ToolNotFoundError."""
        with (
            patch("subprocess.run", side_effect=FileNotFoundError),
            pytest.raises(ToolNotFoundError, match="'nope'"),
        ):
            run_command(["nope"])


class TestPerform:
    """Tests for perform function."""

    def test_replace_process(self, tmp_path: Path) -> None:
        """The process is replaced in the requested directory with merged env."""
        action = ReplaceProcess(["zsh"], cwd=tmp_path, env={"WT_TEST": "1"})
        with (
            patch("wt_cli.core.process.shutil.which", return_value="/bin/zsh"),
            patch("wt_cli.core.process.os.chdir") as mock_chdir,
            patch("wt_cli.core.process.os.execve") as mock_execve,
            patch("subprocess.run"),
        ):
            perform(action)
        mock_chdir.assert_called_once_with(tmp_path)
        executable, argv, env = mock_execve.call_args[0]
        assert executable == "/bin/zsh"
        assert argv == ["zsh"]
        assert env["WT_TEST"] == "1"

    def test_spawn_detached(self) -> None:
        """Detached programs run in their own session with output discarded."""
        with (
            patch("wt_cli.core.process.shutil.which", return_value="/usr/bin/chrome"),
            patch("subprocess.Popen") as mock_popen,
        ):
            assert perform(SpawnDetached(["chrome", "--x"])) == 0
        mock_popen.assert_called_once_with(
            ["/usr/bin/chrome", "--x"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def test_spawn_detached_verbose(self) -> None:
        """Browser output is kept when not quiet."""
        with (
            patch("wt_cli.core.process.shutil.which", return_value="/usr/bin/chrome"),
            patch("subprocess.Popen") as mock_popen,
        ):
            perform(SpawnDetached(["chrome"], quiet=False))
        assert mock_popen.call_args.kwargs["stdout"] is None

    def test_run_command_returns_status(self) -> None:
        """Commands run to completion and report their exit status."""
        with (
            patch("wt_cli.core.process.shutil.which", return_value="/usr/bin/curl"),
            patch("subprocess.run", return_value=MagicMock(returncode=7)) as mock_run,
        ):
            assert perform(RunCommand(["curl", "http://x"])) == 7
        assert mock_run.call_args[0][0] == ["/usr/bin/curl", "http://x"]

    def test_missing_program(self) -> None:
        """Nothing is executed when the program is not on PATH."""
        with (
            patch("wt_cli.core.process.shutil.which", return_value=None),
            patch("wt_cli.core.process.os.execve") as mock_execve,
            pytest.raises(ToolNotFoundError),
        ):
            perform(ReplaceProcess(["nope"]))
        mock_execve.assert_not_called()

    def test_explicit_path_skips_lookup(self) -> None:
        """Programs given with a path are used as-is."""
        with (
            patch("wt_cli.core.process.shutil.which") as mock_which,
            patch("subprocess.run", return_value=MagicMock(returncode=0)),
        ):
            perform(RunCommand(["/opt/bin/tool"]))
        mock_which.assert_not_called()
