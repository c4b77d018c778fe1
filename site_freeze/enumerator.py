# File: site_freeze/enumerator.py
"""site_freeze.enumerator: discovering the URL paths to render from catalog entries."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from site_freeze.config import (
    DEFAULT_EXCLUDE,
    BuildConfig,
    DirectorySourceConfig,
    ManifestSourceConfig,
)
from site_freeze.errors import EnumerationSourceError
from site_freeze.logger import logger

__all__: Sequence[str] = (
    "MetadataSource",
    "DirectorySource",
    "ManifestSource",
    "build_sources",
    "enumerate_paths",
)


@runtime_checkable
class MetadataSource(Protocol):
    """Answers which sub-units (pages) belong to a catalog entry."""

    def unit_paths(self, entry: str) -> List[str]:
        ...


class DirectorySource:
    """Сканирует каталог: запись и все её подкаталоги становятся страницами."""

    def __init__(self, root: Path | str, exclude: Optional[Iterable[str]] = None) -> None:
        self.root = Path(root)
        self.exclude = frozenset(DEFAULT_EXCLUDE if exclude is None else exclude)

    def _skipped(self, name: str) -> bool:
        return name.startswith(".") or name in self.exclude

    def unit_paths(self, entry: str) -> List[str]:
        base = self.root.joinpath(*entry.split("/"))
        if not base.is_dir():
            raise EnumerationSourceError(entry, f"not a directory under {self.root}")
        units = [entry]
        stack = [(base, entry)]
        while stack:
            directory, rel = stack.pop()
            try:
                children = sorted(directory.iterdir(), reverse=True)
            except OSError as exc:
                raise EnumerationSourceError(entry, f"cannot list {directory}: {exc}") from exc
            for child in children:
                # symlinks are not followed
                if child.is_symlink() or self._skipped(child.name):
                    continue
                if child.is_dir():
                    child_rel = f"{rel}/{child.name}"
                    units.append(child_rel)
                    stack.append((child, child_rel))
        return units

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.root)!r})"


class ManifestSource:
    """Отдаёт заранее перечисленные пути из конфигурации."""

    def __init__(self, units: Mapping[str, Iterable[str]]) -> None:
        self.units = {entry.strip("/"): list(paths) for entry, paths in units.items()}

    def unit_paths(self, entry: str) -> List[str]:
        try:
            return list(self.units[entry])
        except KeyError:
            raise EnumerationSourceError(entry, "not listed in manifest") from None

    def __repr__(self) -> str:
        return f"ManifestSource({len(self.units)} entries)"


def build_sources(config: BuildConfig) -> List[MetadataSource]:
    sources: List[MetadataSource] = []
    for source_cfg in config.sources:
        if isinstance(source_cfg, DirectorySourceConfig):
            sources.append(DirectorySource(source_cfg.root, source_cfg.exclude))
        elif isinstance(source_cfg, ManifestSourceConfig):
            sources.append(ManifestSource(source_cfg.units))
    return sources


def enumerate_paths(catalog: Iterable[str], sources: Sequence[MetadataSource]) -> List[str]:
    """
    Return the sorted, de-duplicated URL paths for every catalog entry.

    The first source that answers for an entry is the only one used for it.
    Entries no source knows are skipped with a warning.
    """
    seen: set[str] = set()
    for entry in catalog:
        for source in sources:
            try:
                units = source.unit_paths(entry)
            except EnumerationSourceError as exc:
                logger.debug("%r cannot answer for %s: %s", source, entry, exc.reason)
                continue
            seen.update("/" + unit.strip("/") for unit in units if unit.strip("/"))
            break
        else:
            logger.warning("No metadata source knows %s, skipping", entry)
    paths = sorted(seen)
    logger.info("Enumerated %d unit paths from %d sources", len(paths), len(sources))
    return paths
