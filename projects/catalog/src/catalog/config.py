"""Module for resolving configuration at the command boundary."""

from collections.abc import Mapping
from json import JSONDecodeError, loads
from typing import NamedTuple

from catalog.fetch import CLUSTER_VERSIONS_URL
from catalog.versions import AllowList

TOKEN_ENV = "REPLICATED_API_TOKEN"


class ConfigurationError(ValueError):
    """Raised when configuration is missing or malformed."""


class Settings(NamedTuple):
    """Validated settings for a single run."""

    credential: str
    include_distributions: AllowList
    endpoint: str = CLUSTER_VERSIONS_URL


def resolve_credential(explicit: str | None, environ: Mapping[str, str]) -> str:
    """Resolve the API credential, preferring an explicit value over the environment."""
    if explicit:
        return explicit
    if credential := environ.get(TOKEN_ENV):
        return credential
    msg = f"No API token provided, set the token input or {TOKEN_ENV}"
    raise ConfigurationError(msg)


def parse_distributions(raw: str | None) -> AllowList:
    """Parse a JSON array of distribution names."""
    if not raw:
        msg = "No distributions provided to include"
        raise ConfigurationError(msg)

    try:
        distributions = loads(raw)
    except JSONDecodeError as err:
        msg = f"Distributions to include must be valid JSON: {err}"
        raise ConfigurationError(msg) from err

    if not isinstance(distributions, list):
        msg = "Distributions to include must be a JSON array"
        raise ConfigurationError(msg)
    if not all(isinstance(name, str) for name in distributions):
        msg = "Distributions to include must be strings"
        raise ConfigurationError(msg)

    return frozenset(distributions)


def load_settings(
    token: str | None,
    include_distributions: str | None,
    environ: Mapping[str, str],
    endpoint: str | None = None,
) -> Settings:
    """Build settings from raw inputs, failing fast on invalid values."""
    return Settings(
        credential=resolve_credential(token, environ),
        include_distributions=parse_distributions(include_distributions),
        endpoint=endpoint or CLUSTER_VERSIONS_URL,
    )
