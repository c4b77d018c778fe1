# === FILE: site_freeze/rewrite/html_rewriter.py ===
"""Relocatable HTML output.

:func:`transform_html` parses a rendered page, injects a Content-Security-Policy
``<meta>`` tag as the first child of ``<head>`` and rewrites every absolute
path so the page works from whatever directory the site is served under:

* URL attributes (``href``, ``src``, ``action``, ``poster``, ``data``);
* quoted bundle paths (``"/static/…"``, ``'/third_party/…'``) inside inline
  ``<script>`` bodies.

Text nodes and comments are never touched, which is the reason for walking a
parsed tree instead of running regular expressions over the markup.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from site_freeze.errors import MalformedHTML
from site_freeze.logger import logger
from site_freeze.utils import BUNDLE_ROOTS, is_url_attr, relative_prefix, relativize

__all__: Sequence[str] = ("CSP_CONTENT", "transform_html", "relativize_script_text")

CSP_CONTENT: Final[str] = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data:; "
    "font-src 'self'; "
    "connect-src 'none'; "
    "frame-src 'none'; "
    "object-src 'none'; "
    "base-uri 'none'"
)


def relativize_script_text(text: str, prefix: str) -> str:
    """Rewrite quoted bundle paths in script source, e.g. ``loadScript("/static/a.js")``."""
    for root in BUNDLE_ROOTS:
        for quote in ('"', "'"):
            text = text.replace(quote + root, quote + prefix + root[1:])
    return text


def _csp_meta(soup: BeautifulSoup) -> Tag:
    return soup.new_tag("meta", attrs={"http-equiv": "Content-Security-Policy", "content": CSP_CONTENT})


def _rewrite_attrs(tag: Tag, prefix: str) -> None:
    for name, value in list(tag.attrs.items()):
        if not is_url_attr(name) or not isinstance(value, str):
            continue
        new = relativize(value, prefix)
        if new != value:
            tag[name] = new


def _rewrite_script(tag: Tag, prefix: str) -> None:
    if tag.get("src") is not None or tag.string is None:
        return
    old = str(tag.string)
    new = relativize_script_text(old, prefix)
    if new != old:
        # keep the string's class (Script) so it is serialized unescaped
        tag.string.replace_with(type(tag.string)(new))


def _ensure_head(soup: BeautifulSoup) -> Tag:
    """Create a ``<head>`` for documents that have none (``html.parser`` never adds one)."""
    head = soup.new_tag("head")
    root = soup.find("html")
    if isinstance(root, Tag):
        root.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def transform_html(html: bytes, url_path: str) -> bytes:
    """Return *html* rewritten for a page written at ``map_path(url_path)``.

    Raises :class:`~site_freeze.errors.MalformedHTML` when the markup cannot be
    parsed.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise MalformedHTML(url_path, str(exc)) from exc

    prefix = relative_prefix(url_path)
    csp_injected = False

    # explicit stack, children pushed in reverse so nodes pop in document order
    stack: list[Tag] = [soup]
    while stack:
        node = stack.pop()
        if node is not soup:
            _rewrite_attrs(node, prefix)
            if node.name == "head" and not csp_injected:
                node.insert(0, _csp_meta(soup))
                csp_injected = True
            elif node.name == "script":
                _rewrite_script(node, prefix)
        children = [child for child in node.contents if isinstance(child, Tag)]
        stack.extend(reversed(children))

    if not csp_injected:
        _ensure_head(soup).insert(0, _csp_meta(soup))

    logger.debug("Transformed HTML for %s (prefix %s)", url_path, prefix)
    return soup.encode("utf-8")
