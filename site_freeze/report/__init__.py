# File: site_freeze/report/__init__.py
"""site_freeze.report: JSON and HTML build reports used by the CLI."""

from site_freeze.report.html_report import render_html
from site_freeze.report.json_report import render_json

__all__ = ["render_json", "render_html"]
