import re
import uuid

_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(value: str | None) -> bool:
    """True when ``value`` looks like an id produced by ``new_id``."""
    return isinstance(value, str) and _ID_RE.match(value) is not None
