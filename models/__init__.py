from .tableau_config import TableauConfig
from .tableau_session import TableauSession
from .ts_api import CredentialsType, SiteType, TsRequest, UserType

__all__ = [
    'CredentialsType',
    'SiteType',
    'TableauConfig',
    'TableauSession',
    'TsRequest',
    'UserType'
]
