"""
Application error types.

Data-access code raises these; main.py maps them to HTTP responses with
the carried status code.
"""


class JoblyError(Exception):
    """Base error carrying a message and the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"detail": self.message}


class BadRequestError(JoblyError):
    """Caller supplied structurally invalid input."""
    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """Requested entity does not exist."""
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)
