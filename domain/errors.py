"""Error kinds surfaced to the two views.

Every failure is terminal for the attempt that produced it; the user retries by
resubmitting or reloading.
"""
from typing import Optional


class MemberAppError(Exception):
    """Base class carrying a user-displayable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InitializationError(MemberAppError):
    """Provider configuration or connection failure. Shown as a banner."""


class AuthError(MemberAppError):
    """Session bootstrap failure. Logged; readiness is forced anyway."""


class ValidationError(MemberAppError):
    """Client-side form violation. Blocks submission."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class WriteError(MemberAppError):
    """Remote write failure. Form values are kept for correction."""


class SubscriptionError(MemberAppError):
    """Live query stream failure. Last known rows are kept."""
