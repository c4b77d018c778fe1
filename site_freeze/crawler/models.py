# site_freeze/crawler/models.py
"""
Data models for the SiteFreeze crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from multidict import CIMultiDict, CIMultiDictProxy


@dataclass(frozen=True, slots=True)
class RouterResponse:
    """Status, headers and body returned by a router for one request."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        # header lookups are case-insensitive whatever mapping the router used
        object.__setattr__(self, "headers", CIMultiDictProxy(CIMultiDict(self.headers)))


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """Final response for a URL path, after redirects were followed."""

    url_path: str
    body: bytes
    content_type: str
    status_code: int = 200

    @property
    def is_html(self) -> bool:
        # an empty content type is what the backend sends for some HTML pages
        return "text/html" in self.content_type.lower() or self.content_type == ""
