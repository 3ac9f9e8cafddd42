"""AskLaw error hierarchy.

All errors raised by the store inherit from AskLawError and carry the HTTP
status the API layer answers with.
"""


class AskLawError(Exception):
    """Base error for all store operations."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(AskLawError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(AskLawError):
    """A referenced question or answer does not exist."""

    status_code = 404
