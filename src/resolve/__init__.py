"""Dependency discovery from assembly definitions."""

from resolve.fetcher import fetch_from_package_root
from resolve.models import FetchResult
from resolve.ownership import find_nearest_package_json

__all__ = ["FetchResult", "fetch_from_package_root", "find_nearest_package_json"]
