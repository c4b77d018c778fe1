# site_freeze/rewrite/asset_rewriter.py
"""
Rewriting and copying of bundled static assets (CSS, JS, images, fonts).

CSS and JS files get the absolute bundle paths they reference rewritten by
plain text substitution; everything else is copied byte for byte.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterator, Union

from site_freeze.logger import logger
from site_freeze.utils import BUNDLE_ROOTS
from site_freeze.writer import Writer

REWRITABLE_EXTENSIONS = (".css", ".js")


@dataclass(frozen=True, slots=True)
class AssetBundleEntry:
    """One file or directory of a bundle; *relative_path* includes the bundle name."""

    relative_path: str
    data: bytes = b""
    is_directory: bool = False

    @property
    def is_rewritable(self) -> bool:
        return not self.is_directory and self.relative_path.endswith(REWRITABLE_EXTENSIONS)


def asset_prefix(bundle_relative_path: str) -> str:
    """``../`` chain from the file's directory up to the site root ("" at the root)."""
    directory = posixpath.dirname(bundle_relative_path)
    level = directory.count("/") + 1 if directory else 0
    return "../" * level


def transform_asset(data: bytes, bundle_relative_path: str) -> bytes:
    """
    Rewrite absolute bundle references in a CSS or JS file.

    ``static/frontend/homepage/homepage.css`` referencing
    ``url(/static/shared/icon/search.svg)`` becomes
    ``url(../../../static/shared/icon/search.svg)``.
    """
    prefix = asset_prefix(bundle_relative_path).encode()
    for root in BUNDLE_ROOTS:
        absolute = root.encode()
        relative = prefix + absolute[1:]
        for quote in (b'"', b"'"):
            data = data.replace(quote + absolute, quote + relative)
        # unquoted CSS url(/static/...)
        data = data.replace(b"(" + absolute, b"(" + relative)
    return data


def walk_bundle(root: Union[Path, Traversable], name: str) -> Iterator[AssetBundleEntry]:
    """
    Yield every entry below *root* depth-first, in sorted order.

    *root* can be a directory on disk or an ``importlib.resources`` traversable.
    Paths are reported as ``name/<relative path>``.
    """
    for child in sorted(root.iterdir(), key=lambda c: c.name):
        child_rel = f"{name}/{child.name}"
        if child.is_dir():
            yield AssetBundleEntry(child_rel, is_directory=True)
            yield from walk_bundle(child, child_rel)
        else:
            yield AssetBundleEntry(child_rel, child.read_bytes())


def copy_bundle(root: Union[Path, Traversable], name: str, writer: Writer) -> int:
    """Copy the bundle at *root* to ``<out>/<name>/``; returns the number of files written."""
    count = 0
    writer.ensure_dir(name)
    for entry in walk_bundle(root, name):
        if entry.is_directory:
            writer.ensure_dir(entry.relative_path)
            continue
        data = transform_asset(entry.data, entry.relative_path) if entry.is_rewritable else entry.data
        writer.write(entry.relative_path, data)
        count += 1
    logger.info("Copied %d files from bundle %s", count, name)
    return count


__all__ = [
    "AssetBundleEntry",
    "asset_prefix",
    "transform_asset",
    "walk_bundle",
    "copy_bundle",
]
