"""Worktree naming, location and argument resolution."""
