# fakeso/stores/base.py
"""
Shared pieces of the store adapters.

Store functions return None for "no match" and raise StoreError for anything
that went wrong. StoreError.kind tells a uniqueness violation ("conflict")
apart from every other failure ("mechanical") so callers never need to
inspect driver error codes or messages.
"""
import datetime as dt
from contextlib import contextmanager

from tortoise.exceptions import BaseORMException, IntegrityError

CONFLICT = "conflict"
MECHANICAL = "mechanical"


class StoreError(Exception):
    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def is_conflict(self) -> bool:
        return self.kind == CONFLICT


@contextmanager
def translate_errors(action: str):
    """Re-raise ORM / driver failures inside the block as StoreError."""
    try:
        yield
    except IntegrityError as exc:
        raise StoreError(CONFLICT, f"{action}: duplicate key") from exc
    except (BaseORMException, OSError) as exc:
        raise StoreError(MECHANICAL, f"{action}: {exc}") from exc


def utc_now() -> dt.datetime:
    """Current UTC datetime with timezone information."""
    return dt.datetime.now(dt.timezone.utc)
