"""
Failures the user mediator reports back to the HTTP layer.
"""

from __future__ import annotations

from fastapi import status


class UserServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class Unavailable(UserServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class StorageError(UserServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFound(UserServiceError):
    status_code = status.HTTP_404_NOT_FOUND
