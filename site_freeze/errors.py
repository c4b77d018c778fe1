# site_freeze/errors.py
"""
Exception hierarchy for SiteFreeze.

Per-page errors (:class:`RenderError`, :class:`MalformedHTML`) are caught by the
engine and recorded; :class:`FilesystemError` aborts the whole build.
"""
from __future__ import annotations


class SiteFreezeError(Exception):
    """Base class for all SiteFreeze errors."""


class ConfigError(SiteFreezeError):
    """Raised when the configured application cannot be loaded."""


class EnumerationSourceError(SiteFreezeError):
    """A metadata source does not know the requested catalog entry."""

    def __init__(self, entry: str, reason: str) -> None:
        super().__init__(f"{entry}: {reason}")
        self.entry = entry
        self.reason = reason


class RenderError(SiteFreezeError):
    """Rendering a single page failed."""

    def __init__(self, url_path: str, message: str) -> None:
        super().__init__(f"GET {url_path}: {message}")
        self.url_path = url_path


class TooManyRedirects(RenderError):
    def __init__(self, url_path: str, hops: int) -> None:
        super().__init__(url_path, f"too many redirects ({hops})")
        self.hops = hops


class UnexpectedStatus(RenderError):
    def __init__(self, url_path: str, status: int) -> None:
        super().__init__(url_path, f"returned status {status}")
        self.status = status


class MalformedHTML(SiteFreezeError):
    """The rendered body could not be parsed as HTML."""

    def __init__(self, url_path: str, reason: str) -> None:
        super().__init__(f"{url_path}: malformed HTML: {reason}")
        self.url_path = url_path


class FilesystemError(SiteFreezeError):
    """Writing to the output tree failed. Fatal for the build."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


__all__ = [
    "SiteFreezeError",
    "ConfigError",
    "EnumerationSourceError",
    "RenderError",
    "TooManyRedirects",
    "UnexpectedStatus",
    "MalformedHTML",
    "FilesystemError",
]
