"""Devcontainer session discovery, proxy resolution and editor attachment."""
