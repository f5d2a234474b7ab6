"""Core utilities shared by wt commands."""
