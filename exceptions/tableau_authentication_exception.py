from .tableau_exception import TableauException


class TableauAuthenticationException(TableauException):
    """Sign in response did not carry a session token"""

    def __init__(self, message: str = "Token is missing!"):
        super().__init__(message)
