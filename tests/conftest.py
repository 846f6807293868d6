"""Pytest configuration and fixtures."""
from unittest.mock import patch

import pytest
import requests

from tableau_client import TableauClient


def _make_response(status_code=200, text="", url="https://tableau.example.com"):
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    return response


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects carrying the given body."""
    return _make_response


@pytest.fixture
def tableau_client():
    """Client for a non-default site, not signed in."""
    return TableauClient(
        server_url="https://tableau.example.com",
        admin_user="admin",
        admin_password="secret",
        site_id="mysite",
    )


@pytest.fixture
def mock_request():
    """Patch requests.Session.request, the mock receives the session as its first argument."""
    with patch.object(requests.Session, "request", autospec=True) as mock:
        mock.return_value = _make_response(200, "{}")
        yield mock


@pytest.fixture
def signed_in_client(tableau_client, mock_request):
    """Client signed in with token abc123, the mock is reset afterwards."""
    mock_request.return_value = _make_response(
        200, '{"credentials": {"token": "abc123", "site": {"id": "site-luid"}, "user": {"id": "admin-luid"}}}'
    )
    tableau_client.sign_in()
    mock_request.reset_mock()
    mock_request.return_value = _make_response(200, "{}")
    return tableau_client
