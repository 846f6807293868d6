from .tableau_exception import TableauException
from .tableau_authentication_exception import TableauAuthenticationException
from .tableau_request_exception import TableauRequestException
from .tableau_response_exception import TableauResponseException
from .tableau_transport_exception import TableauTransportException

__all__ = [
    'TableauException',
    'TableauAuthenticationException',
    'TableauRequestException',
    'TableauResponseException',
    'TableauTransportException'
]
