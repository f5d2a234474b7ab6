"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tests.mocks.git import PROJECT_ROOT, FakeGit
from wt_cli.config import Settings
from wt_cli.worktree.locator import WorktreeLocator

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(3))


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def make_locator(settings: Settings) -> Callable[..., WorktreeLocator]:
    """Build a locator over a `FakeGit`.

    ``names`` become sibling worktrees of ``root``; ``current`` is the name of
    the worktree the process is in (None for the main checkout).
    """

    def _make(
        names: Sequence[str] = (),
        *,
        current: str | None = None,
        root: Path = PROJECT_ROOT,
        extra_paths: Sequence[Path] = (),
        **kwargs: object,
    ) -> WorktreeLocator:
        worktrees = [root.parent / f"{root.name}@{n}" for n in names]
        toplevel = root if current is None else root.parent / f"{root.name}@{current}"
        git = FakeGit(
            toplevel=toplevel,
            project_root=root,
            worktrees=[*worktrees, *extra_paths],
            **kwargs,
        )
        return WorktreeLocator(git, settings)  # type: ignore[arg-type]

    return _make
