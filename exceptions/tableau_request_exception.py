from .tableau_exception import TableauException


class TableauRequestException(TableauException):
    """
    Tableau Server answered with an HTTP error status (>= 400).

    The raw response body is kept as-is, Tableau puts its own error
    code and summary in there.
    """

    def __init__(self, url: str, status_code: int, body: str):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server returned http code {status_code} with a message: {body}")
