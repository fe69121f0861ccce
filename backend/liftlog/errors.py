# liftlog/errors.py
"""
Domain errors raised by the services.

Status codes are chosen in ``liftlog.main``; nothing in here knows about HTTP.
"""

class LiftLogError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(LiftLogError):
    """Missing field or a value outside its allowed range."""

class NotFoundError(LiftLogError):
    """A workout or exercise id did not resolve."""

class IndexOutOfRangeError(LiftLogError):
    """exerciseIndex/setIndex does not address an element of a loaded workout."""

class ForbiddenError(LiftLogError):
    """The caller's username does not own the workout."""
