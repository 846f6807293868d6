from .tableau_exception import TableauException


class TableauTransportException(TableauException):
    """The HTTP call could not complete (DNS, refused connection, timeout, redirect loop)"""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Server returned an error: {reason}")
