# File: site_freeze/engine.py
"""site_freeze.engine: оркестрация сборки: перечисление страниц, рендер, переписывание и запись."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from site_freeze.aggregator import BuildReport
from site_freeze.config import BuildConfig, load_config
from site_freeze.crawler.crawler import render
from site_freeze.crawler.router import AppRouter, Router, load_app
from site_freeze.enumerator import MetadataSource, build_sources, enumerate_paths
from site_freeze.errors import MalformedHTML, RenderError
from site_freeze.logger import logger
from site_freeze.rewrite.asset_rewriter import copy_bundle
from site_freeze.rewrite.html_rewriter import transform_html
from site_freeze.utils import remove_duplicates
from site_freeze.writer import Writer

__all__ = ["ProgressSink", "Engine", "build_page", "generate_site", "start_build"]

#: progress(current, total, url_path), called before each page is rendered
ProgressSink = Callable[[int, int, str], None]


async def build_page(router: Router, url_path: str, writer: Writer) -> Path:
    """Render one page, make it relocatable if it is HTML, and write it."""
    page = await render(router, url_path)
    body = transform_html(page.body, page.url_path) if page.is_html else page.body
    return writer.write_page(page, body)


def _copy_favicon(config: BuildConfig, writer: Writer) -> bool:
    bundle, _, inner = config.favicon.partition("/")
    root = config.asset_bundles.get(bundle)
    source = Path(root).joinpath(*inner.split("/")) if root is not None and inner else None
    if source is None or not source.is_file():
        logger.info("Favicon %s not found, skipping", config.favicon)
        return False
    writer.write("favicon.ico", source.read_bytes())
    return True


async def generate_site(
    config: BuildConfig,
    router: Router,
    sources: Optional[Sequence[MetadataSource]] = None,
    *,
    output_dir: Optional[Path] = None,
    progress: Optional[ProgressSink] = None,
) -> BuildReport:
    """
    Build the static site described by *config* using *router* to render pages.

    Pages that fail to render or parse are logged and listed in the report;
    filesystem errors abort the build.
    """
    writer = Writer(output_dir or config.output_dir)
    if sources is None:
        sources = build_sources(config)

    unit_paths = enumerate_paths(config.catalog, sources)
    pages: List[str] = remove_duplicates(["/", *config.extra_pages, *unit_paths])
    report = BuildReport(output_dir=str(writer.out_dir), pages_total=len(pages))

    logger.info("Generating %d pages into %s", len(pages), writer.out_dir)
    for index, url_path in enumerate(pages, start=1):
        if progress is not None:
            progress(index, len(pages), url_path)
        try:
            await build_page(router, url_path, writer)
        except (RenderError, MalformedHTML) as exc:
            logger.error("Rendering %s failed: %s", url_path, exc)
            report.add_failure(url_path, exc)
            continue
        report.pages.append(url_path)

    logger.info("Copying static assets…")
    for name, root in config.asset_bundles.items():
        report.assets[name] = copy_bundle(Path(root), name, writer)
    report.favicon = _copy_favicon(config, writer)

    logger.info(
        "Static site generated in %s: %d pages, %d failed",
        writer.out_dir,
        len(report.pages),
        len(report.failures),
    )
    return report


async def start_build(
    cfg: BuildConfig,
    output_dir: Optional[Path] = None,
    progress: Optional[ProgressSink] = None,
) -> BuildReport:
    """Загружает приложение из конфига, поднимает AppRouter и запускает сборку."""
    app = await load_app(cfg.app)
    async with AppRouter(app) as router:
        return await generate_site(cfg, router, output_dir=output_dir, progress=progress)


class Engine:
    """Фасад для CLI и тестов: загрузка конфига и синхронный запуск сборки."""

    @staticmethod
    def load_config(path: Optional[str]) -> BuildConfig:
        """Загружает конфиг из YAML/JSON."""
        return load_config(path)

    def __init__(self, config: BuildConfig) -> None:
        self.config = config

    def build(
        self,
        output_dir: Optional[Path] = None,
        progress: Optional[ProgressSink] = None,
    ) -> BuildReport:
        """Запускает сборку в новом цикле событий и возвращает отчёт."""
        logger.info("Starting build…")
        try:
            return asyncio.run(start_build(self.config, output_dir, progress))
        except Exception as exc:
            logger.error("Build failed: %s", exc)
            raise
