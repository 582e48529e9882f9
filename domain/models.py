from dataclasses import dataclass
from typing import Dict, Optional, Any
import datetime as _dt


@dataclass
class MemberRecord:
    """Write model for a member document. Password is stored as given (test only)."""
    user_id: str
    name: str
    email: str
    password: str

    def to_document(self, registration_date: Any) -> Dict[str, Any]:
        # registration_date is the provider's server timestamp placeholder
        return {
            'userId': self.user_id,
            'name': self.name,
            'email': self.email,
            'password_test_only': self.password,
            'registrationDate': registration_date,
        }


@dataclass
class Member:
    """Read model for one row of the member list. The password never appears here."""
    id: str
    name: str
    email: str
    registration_date: Optional[_dt.datetime] = None  # None = unavailable


def _coerce_timestamp(value: Any) -> Optional[_dt.datetime]:
    """Firestore returns DatetimeWithNanoseconds (a datetime subclass); anything else is unavailable."""
    if isinstance(value, _dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=_dt.timezone.utc)
        return value
    to_datetime = getattr(value, 'to_datetime', None)
    if callable(to_datetime):
        try:
            converted = to_datetime()
        except (TypeError, ValueError, OverflowError):
            return None
        if isinstance(converted, _dt.datetime):
            return _coerce_timestamp(converted)
    return None


def member_from_dict(doc_id: str, d: Optional[Dict[str, Any]]) -> Member:
    """Safe conversion dropping the stored password and tolerating missing fields."""
    d = d or {}
    return Member(
        id=doc_id,
        name=str(d.get('name') or ''),
        email=str(d.get('email') or ''),
        registration_date=_coerce_timestamp(d.get('registrationDate')),
    )


@dataclass
class SessionUser:
    """Signed-in identity. uid is for display only."""
    uid: str
    id_token: str
    refresh_token: str
    expires_at: _dt.datetime
    is_anonymous: bool = True
