# Filename: files_manager/errors.py
"""Errors raised by the auth gate and the stores.

Each error carries the HTTP status it is rendered with; the app turns them
into ``{"error": <message>}`` responses.
"""
from fastapi import status


class FilesManagerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(FilesManagerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Unauthorized(FilesManagerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(FilesManagerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(FilesManagerError):
    # duplicate registrations are answered with 400, like other bad input
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exist"
