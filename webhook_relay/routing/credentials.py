from __future__ import annotations

from urllib.parse import SplitResult, unquote, urlsplit, urlunsplit

PASSWORD_MASK = "****"


def _host_part(parts: SplitResult) -> str:
    return parts.netloc.rpartition("@")[2]


def extract_credentials(target_url: str) -> tuple[str, str] | None:
    """Return percent-decoded ``(username, password)`` embedded in the URL, if any."""

    parts = urlsplit(target_url)
    if not (parts.username or parts.password):
        return None
    return unquote(parts.username or ""), unquote(parts.password or "")


def strip_credentials(target_url: str) -> str:
    """Drop the userinfo part; scheme, host, path and query are kept as-is."""

    parts = urlsplit(target_url)
    if "@" not in parts.netloc:
        return target_url
    return urlunsplit(parts._replace(netloc=_host_part(parts)))


def mask_url_credentials(target_url: str) -> str:
    """Replace an embedded password with ``****`` for display. Never raises."""

    try:
        parts = urlsplit(target_url)
        username = parts.username or ""
        password = parts.password or ""
    except ValueError:
        return target_url

    if not (username or password):
        return target_url

    userinfo = f"{username}:{PASSWORD_MASK}" if password else username
    return urlunsplit(parts._replace(netloc=f"{userinfo}@{_host_part(parts)}"))
