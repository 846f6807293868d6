"""
Request bodies of the Tableau REST API endpoints used by the client.

Field names follow Python conventions, the wire name is kept in the
field metadata under "name" when it differs.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SiteType:
    content_url: Optional[str] = field(
        default=None,
        metadata={"name": "contentUrl"}
    )


@dataclass
class CredentialsType:
    name: Optional[str] = None
    password: Optional[str] = None
    site: Optional[SiteType] = None


@dataclass
class UserType:
    id: Optional[str] = None
    name: Optional[str] = None
    site_role: Optional[str] = field(
        default=None,
        metadata={"name": "siteRole"}
    )


@dataclass
class TsRequest:
    credentials: Optional[CredentialsType] = None
    user: Optional[UserType] = None
