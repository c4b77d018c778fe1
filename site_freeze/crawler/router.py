# site_freeze/crawler/router.py
"""
Routers: the request/response contract the crawler renders pages through.

:class:`AppRouter` serves an :class:`aiohttp.web.Application` on a loopback
socket inside the current process and talks to it with a ``ClientSession``.
Redirects are never followed here; the crawler resolves them itself.
"""
from __future__ import annotations

import importlib
import inspect
from typing import Any, Optional, Protocol, runtime_checkable

from aiohttp import ClientSession, ClientTimeout, web

from site_freeze.crawler.models import RouterResponse
from site_freeze.errors import ConfigError
from site_freeze.logger import logger

__all__ = ("Router", "AppRouter", "load_app")


@runtime_checkable
class Router(Protocol):
    async def request(self, method: str, path: str) -> RouterResponse:
        ...


class AppRouter:
    """Runs *app* on ``127.0.0.1`` with an ephemeral port for the duration of a build."""

    def __init__(self, app: web.Application, *, host: str = "127.0.0.1", timeout: Optional[float] = None) -> None:
        self.app = app
        self.host = host
        self.timeout = timeout
        self.session: Optional[ClientSession] = None
        self._runner: Optional[web.AppRunner] = None
        self._base_url = ""

    async def __aenter__(self) -> AppRouter:
        self._runner = web.AppRunner(self.app, access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, 0)
        await site.start()
        host, port = self._runner.addresses[0][:2]
        self._base_url = f"http://{host}:{port}"
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            raise_for_status=False,
        )
        logger.debug("Application served at %s", self._base_url)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    async def request(self, method: str, path: str) -> RouterResponse:
        if not self.session:
            raise RuntimeError("Router not started")
        async with self.session.request(method, self._base_url + path, allow_redirects=False) as resp:
            body = await resp.read()
            return RouterResponse(status=resp.status, headers=resp.headers, body=body)


async def load_app(reference: str) -> web.Application:
    """
    Import ``"package.module:attr"`` and return the application it names.

    *attr* may be an :class:`aiohttp.web.Application` or a callable (sync or
    async) returning one.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"app reference must look like 'module:attr', got {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import {module_name!r}: {exc}") from exc
    try:
        target: Any = getattr(module, attr)
    except AttributeError as exc:
        raise ConfigError(f"{module_name!r} has no attribute {attr!r}") from exc

    if not isinstance(target, web.Application) and callable(target):
        target = target()
        if inspect.isawaitable(target):
            target = await target
    if not isinstance(target, web.Application):
        raise ConfigError(f"{reference!r} did not produce an aiohttp Application")
    return target
