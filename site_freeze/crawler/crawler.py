# === FILE: site_freeze/crawler/crawler.py ===
from __future__ import annotations

import logging
from typing import Final

from site_freeze.crawler.models import RenderedPage
from site_freeze.crawler.router import Router
from site_freeze.errors import TooManyRedirects, UnexpectedStatus
from site_freeze.utils import MAX_REDIRECTS, resolve_location

__all__ = ("REDIRECT_STATUS", "render")

REDIRECT_STATUS: Final[frozenset[int]] = frozenset({301, 302})

_log = logging.getLogger("SiteFreeze")


async def render(router: Router, url_path: str, *, max_redirects: int = MAX_REDIRECTS) -> RenderedPage:
    """
    Render *url_path* through *router*, following 301/302 redirects.

    The returned page keeps the original *url_path* so it is written where it
    was requested. Raises :class:`TooManyRedirects` after more than
    *max_redirects* hops and :class:`UnexpectedStatus` for a non-200 final
    response.
    """
    current = url_path
    hops = 0
    while True:
        resp = await router.request("GET", current)
        location = resp.headers.get("Location", "")
        if resp.status in REDIRECT_STATUS and location:
            hops += 1
            if hops > max_redirects:
                _log.debug("Redirect chain for %s exceeded %d hops", url_path, max_redirects)
                raise TooManyRedirects(url_path, hops)
            current = resolve_location(current, location)
            continue
        if resp.status != 200:
            raise UnexpectedStatus(current, resp.status)
        return RenderedPage(
            url_path=url_path,
            body=resp.body,
            content_type=resp.headers.get("Content-Type", ""),
            status_code=resp.status,
        )
