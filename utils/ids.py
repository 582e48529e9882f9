import uuid

from domain.constants import ID_PREFIX_LENGTH


def create_member_id() -> str:
    # random UUID4; collisions treated as negligible
    return str(uuid.uuid4())


def short_id(value: str, length: int = ID_PREFIX_LENGTH) -> str:
    return (value or '')[:length]
