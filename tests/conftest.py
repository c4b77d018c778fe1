# File: tests/conftest.py
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

import pytest

from site_freeze.config import BuildConfig
from site_freeze.crawler.models import RouterResponse


class FakeRouter:
    """In-memory router: path -> RouterResponse, unknown paths answer 404."""

    def __init__(self, routes: Mapping[str, RouterResponse]) -> None:
        self.routes = dict(routes)
        self.calls: List[Tuple[str, str]] = []

    async def request(self, method: str, path: str) -> RouterResponse:
        self.calls.append((method, path))
        return self.routes.get(path, RouterResponse(status=404, body=b"not found"))


def html_response(body: str, content_type: str = "text/html; charset=utf-8") -> RouterResponse:
    return RouterResponse(status=200, headers={"Content-Type": content_type}, body=body.encode())


def redirect(location: str, status: int = 302) -> RouterResponse:
    return RouterResponse(status=status, headers={"Location": location})


PAGE = (
    "<!DOCTYPE html><html><head><title>{title}</title>"
    '<link rel="stylesheet" href="/static/frontend/frontend.css"></head>'
    '<body><a href="/">Home</a><a href="/about">About</a>'
    '<script>loadScript("/static/frontend/frontend.js")</script></body></html>'
)


@pytest.fixture()
def site_routes() -> Dict[str, RouterResponse]:
    """Small documentation site: homepage, informational pages and two units."""
    return {
        "/": html_response(PAGE.format(title="Home")),
        "/about": html_response(PAGE.format(title="About")),
        "/license-policy": html_response(PAGE.format(title="Licenses")),
        "/search-help": redirect("/about"),
        "/net": html_response(PAGE.format(title="net")),
        "/net/http": html_response(PAGE.format(title="net/http")),
    }


@pytest.fixture()
def bundle_dirs(tmp_path) -> Dict[str, Path]:
    """
    Create static/ and third_party/ asset bundles on disk.
    """
    static = tmp_path / "bundles" / "static"
    third_party = tmp_path / "bundles" / "third_party"
    (static / "frontend" / "homepage").mkdir(parents=True)
    (static / "shared" / "icon").mkdir(parents=True)
    (third_party / "fonts").mkdir(parents=True)
    (static / "frontend" / "frontend.css").write_text(
        "@import '/static/shared/shared.css';\nbody { background: url(/third_party/fonts/bg.png); }"
    )
    (static / "frontend" / "homepage" / "homepage.css").write_text(
        "background: url(/static/shared/icon/search.svg)"
    )
    (static / "frontend" / "frontend.js").write_text('import "/static/frontend/homepage/x.js";')
    (static / "shared" / "icon" / "favicon.ico").write_bytes(b"\x00\x01ico")
    (static / "shared" / "icon" / "search.svg").write_text("<svg href=\"/static/x\"></svg>")
    (third_party / "fonts" / "font.woff2").write_bytes(b"wOF2'/static/")
    return {"static": static, "third_party": third_party}


@pytest.fixture()
def build_config(tmp_path, bundle_dirs) -> BuildConfig:
    """
    Return a valid BuildConfig with a manifest source and the asset bundles.
    """
    return BuildConfig(
        app="tests_app:make_app",
        output_dir=tmp_path / "site",
        catalog=["net"],
        sources=[{"kind": "manifest", "units": {"net": ["net", "net/http"]}}],
        asset_bundles=bundle_dirs,
    )
