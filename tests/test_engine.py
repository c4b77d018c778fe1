# File: tests/test_engine.py
"""End-to-end tests of the build: enumeration, rendering, rewriting and writing."""
from __future__ import annotations

import textwrap

import pytest
from bs4 import BeautifulSoup
from conftest import FakeRouter, html_response, redirect

from site_freeze.config import BuildConfig
from site_freeze.engine import Engine, build_page, generate_site
from site_freeze.enumerator import ManifestSource
from site_freeze.errors import FilesystemError
from site_freeze.writer import Writer


@pytest.mark.asyncio()
async def test_generate_site_writes_relocatable_tree(build_config, site_routes):
    router = FakeRouter(site_routes)
    seen = []
    report = await generate_site(build_config, router, progress=lambda i, n, p: seen.append((i, n, p)))

    out = build_config.output_dir
    assert seen == [
        (1, 6, "/"),
        (2, 6, "/about"),
        (3, 6, "/license-policy"),
        (4, 6, "/search-help"),
        (5, 6, "/net"),
        (6, 6, "/net/http"),
    ]
    assert report.ok
    assert report.pages_total == 6

    home = (out / "index.html").read_text()
    assert 'href="./static/frontend/frontend.css"' in home
    assert 'loadScript("./static/frontend/frontend.js")' in home

    deep = (out / "net" / "http" / "index.html").read_text()
    assert 'href="../../about"' in deep
    assert 'href="../../"' in deep
    head = BeautifulSoup(deep, "html.parser").find("head")
    assert head.contents[0].get("http-equiv") == "Content-Security-Policy"

    # redirected page is stored under the requested path
    help_page = (out / "search-help" / "index.html").read_text()
    assert "<title>About</title>" in help_page

    assert (out / "static" / "frontend" / "homepage" / "homepage.css").read_text() == (
        "background: url(../../../static/shared/icon/search.svg)"
    )
    assert (out / "third_party" / "fonts" / "font.woff2").is_file()
    assert (out / "favicon.ico").read_bytes() == b"\x00\x01ico"
    assert report.favicon
    assert report.assets == {"static": 5, "third_party": 1}


@pytest.mark.asyncio()
async def test_failing_pages_do_not_abort(build_config, site_routes):
    site_routes["/about"] = redirect("/about")  # loop
    del site_routes["/net"]
    report = await generate_site(build_config, FakeRouter(site_routes))

    failed = {f["url_path"]: f["error"] for f in report.failures}
    assert failed == {"/about": "TooManyRedirects", "/search-help": "TooManyRedirects", "/net": "UnexpectedStatus"}
    assert report.pages == ["/", "/license-policy", "/net/http"]
    assert not (build_config.output_dir / "about").exists()
    assert (build_config.output_dir / "net" / "http" / "index.html").is_file()


@pytest.mark.asyncio()
async def test_unit_path_duplicating_extra_page_is_listed_once(build_config, site_routes):
    cfg = build_config.model_copy(update={"catalog": ["about"], "sources": []})
    router = FakeRouter(site_routes)
    report = await generate_site(cfg, router, [ManifestSource({"about": ["about"]})])
    assert report.pages_total == 4
    assert report.pages == ["/", "/about", "/license-policy", "/search-help"]
    assert [c for c in router.calls if c[1] == "/about"] == [("GET", "/about"), ("GET", "/about")]


@pytest.mark.asyncio()
async def test_missing_favicon_is_ignored(build_config, site_routes):
    cfg = build_config.model_copy(update={"favicon": "static/nope.ico"})
    report = await generate_site(cfg, FakeRouter(site_routes))
    assert not report.favicon
    assert not (cfg.output_dir / "favicon.ico").exists()


@pytest.mark.asyncio()
async def test_filesystem_error_is_fatal(tmp_path, build_config, site_routes):
    blocker = tmp_path / "blocked"
    blocker.write_text("file in the way")
    with pytest.raises(FilesystemError):
        await generate_site(build_config, FakeRouter(site_routes), output_dir=blocker)


@pytest.mark.asyncio()
async def test_build_page_keeps_non_html_bytes(tmp_path):
    router = FakeRouter(
        {"/robots.txt": html_response("User-agent: *\nDisallow: /static/", content_type="text/plain")}
    )
    written = await build_page(router, "/robots.txt", Writer(tmp_path))
    assert written == tmp_path / "robots.txt"
    assert written.read_text() == "User-agent: *\nDisallow: /static/"


APP_MODULE = textwrap.dedent(
    """
    from aiohttp import web


    async def make_app():
        app = web.Application()

        async def page(request):
            body = '<html><head></head><body><a href="/">home</a>' + request.path + '</body></html>'
            return web.Response(text=body, content_type="text/html")

        async def moved(_):
            raise web.HTTPMovedPermanently("/about")

        app.router.add_get("/", page)
        app.router.add_get("/about", page)
        app.router.add_get("/license-policy", page)
        app.router.add_get("/search-help", moved)
        app.router.add_get("/net", page)
        app.router.add_get("/net/http", page)
        return app
    """
)


def test_engine_build_with_aiohttp_app(tmp_path, monkeypatch, bundle_dirs):
    (tmp_path / "freeze_demo_app.py").write_text(APP_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    cfg = BuildConfig(
        app="freeze_demo_app:make_app",
        output_dir=tmp_path / "site",
        catalog=["net"],
        sources=[{"kind": "manifest", "units": {"net": ["net", "net/http"]}}],
        asset_bundles=bundle_dirs,
    )
    report = Engine(cfg).build()

    assert report.ok
    assert report.pages == ["/", "/about", "/license-policy", "/search-help", "/net", "/net/http"]
    page = (tmp_path / "site" / "net" / "http" / "index.html").read_text()
    assert 'href="../../"' in page
    assert "/net/http" in page
    assert "/about" in (tmp_path / "site" / "search-help" / "index.html").read_text()
