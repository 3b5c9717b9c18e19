"""Tests for fetching the cluster versions catalog."""

import pytest
import responses
from requests import ConnectionError as RequestsConnectionError
from responses import matchers

from catalog.fetch import CLUSTER_VERSIONS_URL, TransportError, fetch_catalog

PAYLOAD = {
    "cluster-versions": [
        {"short_name": "k3s", "versions": ["v1.23", "v1.25", "v1.24"]},
        {"short_name": "eks", "versions": ["v1.28"]},
    ],
}


@responses.activate
def test_fetch_catalog_sends_credential() -> None:
    """Test that the credential is sent as the Authorization header."""
    responses.add(
        responses.GET,
        CLUSTER_VERSIONS_URL,
        json=PAYLOAD,
        match=[matchers.header_matcher({"Authorization": "secret-token"})],
    )

    catalog = fetch_catalog("secret-token")

    assert catalog == PAYLOAD["cluster-versions"]
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_catalog_custom_endpoint() -> None:
    """Test that a different endpoint can be queried."""
    endpoint = "https://api.example.com/vendor/v3/cluster/versions"
    responses.add(responses.GET, endpoint, json={"cluster-versions": []})

    assert fetch_catalog("token", endpoint) == []


@responses.activate
def test_fetch_catalog_error_status() -> None:
    """Test that non-success responses raise with the status code."""
    responses.add(responses.GET, CLUSTER_VERSIONS_URL, status=403)

    with pytest.raises(TransportError, match="403") as exc_info:
        fetch_catalog("bad-token")

    assert exc_info.value.status_code == 403
    # No retries
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_catalog_network_failure() -> None:
    """Test that connection errors are wrapped with their cause."""
    error = RequestsConnectionError("connection reset")
    responses.add(responses.GET, CLUSTER_VERSIONS_URL, body=error)

    with pytest.raises(TransportError) as exc_info:
        fetch_catalog("token")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.cause, RequestsConnectionError)


@responses.activate
def test_fetch_catalog_invalid_json() -> None:
    """Test that a body that is not JSON is a transport error."""
    responses.add(responses.GET, CLUSTER_VERSIONS_URL, body="<html>oops</html>")

    with pytest.raises(TransportError, match="not valid JSON"):
        fetch_catalog("token")


@responses.activate
def test_fetch_catalog_missing_versions_list() -> None:
    """Test that a payload without the versions list is rejected."""
    responses.add(responses.GET, CLUSTER_VERSIONS_URL, json={"error": "nope"})

    with pytest.raises(TransportError, match="cluster-versions"):
        fetch_catalog("token")
