"""The agent skill document for worktree-isolated execution."""

from __future__ import annotations

from importlib import resources

from wt_cli.cli import app


def read_skill() -> str:
    """Return the bundled skill markdown."""
    return resources.files("wt_cli").joinpath("skill", "SKILL.md").read_text()


@app.command("skill")
def skill() -> None:
    """Print the coding-agent skill for worktree-isolated execution.

    Teaches a coding agent to use `wt exec` for commands that could conflict
    across worktrees. To import into a project:

    `wt skill > .claude/wt-exec.md`, then add `@.claude/wt-exec.md` to the
    project's agent instructions file.
    """
    print(read_skill(), end="")
