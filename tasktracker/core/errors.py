"""Failures the service reports to callers.

Each error carries the HTTP status it maps to and a message that is safe to
show a client. Anything that is not a ``TaskTrackerError`` is treated as an
internal fault by the exception handlers in ``tasktracker.api.errors``.
"""
from typing import Optional


class TaskTrackerError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(TaskTrackerError):
    status_code = 400
    message = "Invalid input"


class DuplicateEmail(TaskTrackerError):
    status_code = 400
    message = "User already exists"


class InvalidCredentials(TaskTrackerError):
    # Same message for unknown email and wrong password
    status_code = 401
    message = "Invalid credentials"


class Unauthenticated(TaskTrackerError):
    status_code = 401
    message = "Authentication required"


class NotFound(TaskTrackerError):
    # Also raised for records owned by someone else
    status_code = 404
    message = "Not found"


class InternalFault(TaskTrackerError):
    status_code = 500
