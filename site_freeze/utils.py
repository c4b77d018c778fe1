# File: site_freeze/utils.py
"""site_freeze.utils: URL-path helpers shared by the crawler, rewriters and writer."""

from __future__ import annotations

from typing import Collection, Final, FrozenSet, List, Sequence, Tuple
from urllib.parse import urljoin, urlsplit

from site_freeze.logger import logger

__all__: Sequence[str] = (
    "BUNDLE_ROOTS",
    "URL_ATTRS",
    "MAX_REDIRECTS",
    "depth",
    "relative_prefix",
    "prefix_for_depth",
    "is_url_attr",
    "is_rewrite_target",
    "relativize",
    "resolve_location",
    "remove_duplicates",
)

#: Absolute roots under which first-party and third-party assets are served.
BUNDLE_ROOTS: Final[Tuple[str, ...]] = ("/static/", "/third_party/")

#: HTML attributes that may carry a URL.
URL_ATTRS: Final[FrozenSet[str]] = frozenset({"href", "src", "action", "poster", "data"})

MAX_REDIRECTS: Final[int] = 5


def depth(url_path: str) -> int:
    """Number of non-empty segments in *url_path*; ``depth("/") == 0``."""
    return len([seg for seg in url_path.split("/") if seg])


def prefix_for_depth(level: int) -> str:
    return "./" if level == 0 else "../" * level


def relative_prefix(url_path: str) -> str:
    """Return the ``../`` chain leading from the page at *url_path* to the site root.

    Pages are written as ``<path>/index.html``, so ``/about`` sits one level
    deep and ``/net/http`` two::

        relative_prefix("/")         -> "./"
        relative_prefix("/about")    -> "../"
        relative_prefix("/net/http") -> "../../"
    """
    return prefix_for_depth(depth(url_path))


def is_url_attr(name: str) -> bool:
    return name in URL_ATTRS


def is_rewrite_target(value: str) -> bool:
    """True for absolute paths; protocol-relative URLs and fragments are left alone."""
    return value.startswith("/") and not value.startswith("//")


def relativize(value: str, prefix: str) -> str:
    """Rewrite an absolute *value* against *prefix*; other values come back unchanged."""
    if not is_rewrite_target(value):
        return value
    if value == "/":
        return prefix
    return prefix + value[1:]


def resolve_location(current: str, location: str) -> str:
    """Turn a ``Location`` header into the next URL path to request.

    Absolute URLs keep only their path and query, relative ones are joined
    onto *current*.
    """
    parts = urlsplit(urljoin(current, location))
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    logger.debug("Redirect %s -> %s", current, path)
    return path


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Drop duplicates while preserving first-seen order."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate paths", removed)
    return unique
