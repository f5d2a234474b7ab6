"""Helpers for clients that reach a devcontainer through its SOCKS5 proxy."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from wt_cli.constants import LOOPBACK_ADDRESS


def socks_proxy_url(port: int, *, remote_dns: bool = False) -> str:
    """Return the proxy URL for a published port.

    With ``remote_dns`` (``socks5h``) hostnames are resolved inside the
    container, so service names from its network work.
    """
    scheme = "socks5h" if remote_dns else "socks5"
    return f"{scheme}://{LOOPBACK_ADDRESS}:{port}"


def normalize_localhost_url(arg: str) -> str:
    """Rewrite ``localhost`` URLs to ``127.0.0.1``, keeping everything else.

    Through the proxy, ``localhost`` would be resolved by the container's
    resolver rather than meaning the container's loopback interface, and
    browsers special-case it to bypass proxies. Non-URL arguments are
    returned as-is.
    """
    try:
        parts = urlsplit(arg)
        port = parts.port
    except ValueError:
        return arg
    if not parts.netloc or parts.hostname != "localhost":
        return arg
    userinfo, at, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{LOOPBACK_ADDRESS}"
    if port is not None:
        netloc = f"{netloc}:{port}"
    return urlunsplit(parts._replace(netloc=netloc))
