"""Tests for request body serialization."""
import json

import pytest

from models import CredentialsType, SiteType, TableauSession, UserType


def test_nested_dataclass_uses_wire_names(tableau_client):
    credentials = CredentialsType(name="admin", password="secret", site=SiteType(content_url=""))

    content = tableau_client._get_object_as_request_content(credentials)

    assert json.loads(content) == {
        "credentials": {"name": "admin", "password": "secret", "site": {"contentUrl": ""}}
    }


def test_unset_fields_are_omitted(tableau_client):
    content = tableau_client._get_object_as_request_content(UserType(id="u1"))

    assert json.loads(content) == {"user": {"id": "u1"}}


def test_all_user_fields(tableau_client):
    content = tableau_client._get_object_as_request_content(UserType(id="u1", name="alice", site_role="Viewer"))

    assert json.loads(content) == {"user": {"id": "u1", "name": "alice", "siteRole": "Viewer"}}


def test_unknown_request_object(tableau_client):
    with pytest.raises(ValueError, match="SiteType"):
        tableau_client._get_object_as_request_content(SiteType(content_url="marketing"))


def test_session_repr_hides_token():
    session = TableauSession(token="abc123", site_luid="site-luid")
    assert "abc123" not in repr(session)
    assert "site-luid" in repr(session)
