"""
Error taxonomy for the tenancy core.

Store, policy and provisioning failures are raised as these exceptions and
propagate to the HTTP layer unchanged, where main.py maps each category to a
status code. Messages for denial, conflict and not-found are deliberately
generic so a caller cannot tell "row missing" apart from "row hidden".
"""

from typing import Optional


class TenancyError(Exception):
    """Base class for every error raised by the tenancy core."""

    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, *, details: Optional[dict] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details or {}


class Unauthenticated(TenancyError):
    """No resolvable caller identity."""

    default_message = "Not authenticated"


class AuthError(TenancyError):
    """Bad credentials or sign-up conflict; the message is shown to the caller."""

    default_message = "Authentication error"


class PolicyDenied(TenancyError):
    """A write predicate evaluated false for at least one affected row."""

    default_message = "Operation not permitted"


class ConstraintViolation(TenancyError):
    """Foreign-key, uniqueness or check constraint rejected the write."""

    default_message = "Request conflicts with existing data"


class NotFound(TenancyError):
    """No readable row matched; indistinguishable from a hidden row."""

    default_message = "Not found"


class InvalidRequest(TenancyError):
    """Unknown table or column in a store call."""

    default_message = "Invalid request"
