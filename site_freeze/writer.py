# site_freeze/writer.py
"""
Output mapping and persistence.

Every extensionless URL path becomes ``<path>/index.html`` so that a page's
directory depth equals its segment count, which is what the relative prefixes
computed in :mod:`site_freeze.utils` rely on.
"""
from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Union

from site_freeze.crawler.models import RenderedPage
from site_freeze.errors import FilesystemError
from site_freeze.logger import logger


def map_path(url_path: str) -> str:
    """
    Map a URL path to a POSIX path relative to the output root.

    ``/`` → ``index.html``, ``/foo/bar`` → ``foo/bar/index.html`` and paths
    whose last segment has an extension (``/favicon.ico``) are kept verbatim.
    """
    clean = url_path.split("?", 1)[0].lstrip("/")
    if not clean:
        return "index.html"
    # only the last segment is inspected: `/gopkg.in/yaml.v3` is written as a file,
    # one level shallower than relative_prefix() assumes for that page
    if posixpath.splitext(clean)[1]:
        return clean
    return posixpath.join(clean.rstrip("/"), "index.html")


class Writer:
    """Writes output files below *out_dir*, creating directories as needed."""

    def __init__(self, out_dir: Union[str, Path]) -> None:
        self.out_dir = Path(out_dir)
        self.files_written = 0

    def destination(self, url_path: str) -> Path:
        return self.out_dir.joinpath(*map_path(url_path).split("/"))

    def ensure_dir(self, relative: str) -> Path:
        target = self.out_dir.joinpath(*[p for p in relative.split("/") if p])
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(str(target), exc.strerror or str(exc)) from exc
        return target

    def write(self, relative: str, data: bytes) -> Path:
        """Write *data* to *relative* (POSIX path under the output root). Last writer wins."""
        target = self.out_dir.joinpath(*[p for p in relative.split("/") if p])
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise FilesystemError(str(target), exc.strerror or str(exc)) from exc
        self.files_written += 1
        logger.debug("Wrote %s (%d bytes)", target, len(data))
        return target

    def write_page(self, page: RenderedPage, body: bytes | None = None) -> Path:
        """Persist *page* (or an already transformed *body*) under its URL path."""
        return self.write(map_path(page.url_path), page.body if body is None else body)


__all__ = ["map_path", "Writer"]
