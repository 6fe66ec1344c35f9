from fastapi import status

from src.shared.result import Error


class ClientError(Exception):
    """A use-case error the caller can fix, rendered with its own code."""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ServerError(Exception):
    """An unexpected use-case error; the message is never exposed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
