"""site_freeze.crawler: rendering pages through an in-process router."""

from site_freeze.crawler.crawler import render
from site_freeze.crawler.models import RenderedPage, RouterResponse
from site_freeze.crawler.router import AppRouter, Router, load_app

__all__ = ["render", "RenderedPage", "RouterResponse", "AppRouter", "Router", "load_app"]
