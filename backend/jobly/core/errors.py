"""Error kinds raised by the models and the validation gate.

The HTTP layer turns each of these into a JSON body of the form
``{"error": {"message": ..., "status": ...}}`` using ``status``.
"""
from typing import List, Union

Message = Union[str, List[str]]


class ApiError(Exception):
    status: int = 500

    def __init__(self, message: Message = "Internal Server Error", status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequestError(ApiError):
    """Client data is malformed or contradicts itself."""

    status = 400

    def __init__(self, message: Message = "Bad Request"):
        super().__init__(message)


class NotFoundError(ApiError):
    """The referenced row does not exist."""

    status = 404

    def __init__(self, message: Message = "Not Found"):
        super().__init__(message)


class ConflictError(ApiError):
    """A unique key is already taken."""

    status = 409

    def __init__(self, message: Message = "Conflict"):
        super().__init__(message)
