from .tableau_exception import TableauException


class TableauResponseException(TableauException):
    """Successful response whose body could not be decoded as JSON"""

    def __init__(self, url: str, body: str):
        self.url = url
        self.body = body
        super().__init__(f"Server returned a response that is not valid JSON: {body}")
