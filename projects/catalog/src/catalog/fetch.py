"""Module for fetching the cluster versions catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from requests import RequestException, get

if TYPE_CHECKING:
    from catalog.versions import CatalogEntry

logger = getLogger(__name__)

CLUSTER_VERSIONS_URL = "https://api.replicated.com/vendor/v3/cluster/versions"


class TransportError(Exception):
    """Raised when the catalog cannot be fetched."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


def fetch_catalog(
    credential: str,
    endpoint: str = CLUSTER_VERSIONS_URL,
    *,
    timeout: float = 30,
) -> list[CatalogEntry]:
    """Fetch the distributions and versions available for clusters."""
    headers = {"Authorization": credential}
    logger.debug("Fetching cluster versions from %s", endpoint)
    try:
        response = get(endpoint, timeout=timeout, headers=headers)
    except RequestException as err:
        msg = f"Request failed: {err}"
        raise TransportError(msg, cause=err) from err

    if response.status_code != 200:  # noqa: PLR2004
        msg = f"Request failed with status code {response.status_code}"
        raise TransportError(msg, status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as err:
        msg = "Response body is not valid JSON"
        raise TransportError(msg, status_code=response.status_code, cause=err) from err

    catalog = payload.get("cluster-versions") if isinstance(payload, dict) else None
    if not isinstance(catalog, list):
        msg = "Response is missing the cluster-versions list"
        raise TransportError(msg, status_code=response.status_code)

    logger.debug("Fetched %d distributions", len(catalog))
    return catalog
