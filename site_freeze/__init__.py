# site_freeze/__init__.py
"""
SiteFreeze package initializer.
Defines package version; the CLI lives in :mod:`site_freeze.cli`.
"""
__version__ = "0.1.0"
