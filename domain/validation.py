"""Client-side registration rules.

Checks run in a fixed order (presence, email shape, password length) and the
first failing rule wins.
"""
import re
from typing import Optional

from domain.constants import (
    MIN_PASSWORD_LENGTH,
    MSG_REQUIRED_FIELDS,
    MSG_INVALID_EMAIL,
    MSG_PASSWORD_TOO_SHORT,
)
from domain.errors import ValidationError

EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')


def is_valid_email(text: str) -> bool:
    return bool(text) and EMAIL_RE.fullmatch(text) is not None


def first_violation(name: str, email: str, password: str) -> Optional[ValidationError]:
    if not name:
        return ValidationError(MSG_REQUIRED_FIELDS, field='name')
    if not email:
        return ValidationError(MSG_REQUIRED_FIELDS, field='email')
    if not password:
        return ValidationError(MSG_REQUIRED_FIELDS, field='password')
    if not is_valid_email(email):
        return ValidationError(MSG_INVALID_EMAIL, field='email')
    # counted in code points: an emoji is one character
    if len(password) < MIN_PASSWORD_LENGTH:
        return ValidationError(MSG_PASSWORD_TOO_SHORT, field='password')
    return None


def validate_registration(name: str, email: str, password: str) -> None:
    """Raise ValidationError for the first violated rule."""
    error = first_violation(name, email, password)
    if error is not None:
        raise error
