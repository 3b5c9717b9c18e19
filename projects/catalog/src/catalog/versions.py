"""Module for coercing cluster versions and selecting the latest per distribution."""

from collections.abc import Iterable
from logging import getLogger
from re import ASCII
from re import compile as compile_pattern
from typing import NotRequired, TypedDict

from semver import Version

logger = getLogger(__name__)

# First MAJOR[.MINOR[.PATCH]] run of ASCII digits, components capped at 16 digits
COERCE_PATTERN = compile_pattern(
    r"(?:^|\D)(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|\D)",
    ASCII,
)

type AllowList = frozenset[str]


class CatalogEntry(TypedDict):
    """Distribution as listed by the cluster versions endpoint."""

    short_name: str
    versions: list[str]
    instance_types: NotRequired[list[str]]
    nodes_max: NotRequired[int]


class VersionSelection(TypedDict):
    """Latest version selected for a distribution."""

    distribution: str
    version: str


type Catalog = Iterable[CatalogEntry]


class MalformedVersionError(ValueError):
    """Raised when a version string has no recognizable numeric part."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Cannot coerce version: {version!r}")


def coerce_version(raw: str) -> Version:
    """Coerce a loosely formatted version string into a semantic version.

    Leading text such as ``v`` is skipped and missing minor or patch
    components default to zero, so ``"v1.24"`` becomes ``1.24.0``.
    Pre-release and build suffixes are dropped. Only ASCII digits count.

    Raises:
        MalformedVersionError: If no numeric component can be found

    """
    match = COERCE_PATTERN.search(raw)
    if match is None:
        raise MalformedVersionError(raw)

    major, minor, patch = match.groups(default="0")
    return Version(int(major), int(minor), int(patch))


def latest_version(versions: Iterable[str]) -> str | None:
    """Get the latest of the given raw versions, keeping the original string.

    Versions are folded left to right, a later version only replaces the
    current one when it is strictly greater, so ties keep the earlier string.
    """
    latest: str | None = None
    latest_parsed: Version | None = None
    for candidate in versions:
        if latest is None:
            latest = candidate
            continue

        if latest_parsed is None:
            latest_parsed = coerce_version(latest)
        parsed = coerce_version(candidate)
        if parsed > latest_parsed:
            latest, latest_parsed = candidate, parsed

    return latest


def select_latest(catalog: Catalog, allow_list: AllowList) -> list[VersionSelection]:
    """Select the latest version of every allowed distribution in catalog order."""
    selections: list[VersionSelection] = []
    for entry in catalog:
        distribution = entry["short_name"]
        if distribution not in allow_list:
            logger.debug("Skipping distribution %s", distribution)
            continue

        version = latest_version(entry["versions"])
        if version is None:
            logger.warning("Distribution %s has no versions, omitting", distribution)
            continue

        selections.append({"distribution": distribution, "version": version})

    return selections


def missing_distributions(catalog: Catalog, allow_list: AllowList) -> list[str]:
    """Get the allowed distributions that the catalog does not list."""
    listed = {entry["short_name"] for entry in catalog}
    return sorted(allow_list - listed)
