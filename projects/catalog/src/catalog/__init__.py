"""Module for fetching cluster versions and selecting the latest per distribution."""

from catalog.config import (
    ConfigurationError,
    Settings,
    load_settings,
    parse_distributions,
    resolve_credential,
)
from catalog.fetch import CLUSTER_VERSIONS_URL, TransportError, fetch_catalog
from catalog.versions import (
    AllowList,
    CatalogEntry,
    MalformedVersionError,
    VersionSelection,
    coerce_version,
    latest_version,
    missing_distributions,
    select_latest,
)

__all__ = [
    "CLUSTER_VERSIONS_URL",
    "AllowList",
    "CatalogEntry",
    "ConfigurationError",
    "MalformedVersionError",
    "Settings",
    "TransportError",
    "VersionSelection",
    "coerce_version",
    "fetch_catalog",
    "latest_version",
    "load_settings",
    "missing_distributions",
    "parse_distributions",
    "resolve_credential",
    "select_latest",
]
