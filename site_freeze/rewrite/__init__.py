"""site_freeze.rewrite: making rendered pages and bundled assets relocatable."""

from site_freeze.rewrite.asset_rewriter import copy_bundle, transform_asset, walk_bundle
from site_freeze.rewrite.html_rewriter import CSP_CONTENT, transform_html

__all__ = ["CSP_CONTENT", "copy_bundle", "transform_asset", "transform_html", "walk_bundle"]
