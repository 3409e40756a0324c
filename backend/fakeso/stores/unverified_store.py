# fakeso/stores/unverified_store.py
"""
Pending-registration store, keyed by verification token.
"""
import datetime as dt
from typing import Optional

from fakeso.models.unverified_user import UnverifiedUser
from fakeso.stores.base import translate_errors, utc_now


async def create_unverified_user(
    username: str,
    email: str,
    password_hash: str,
    token: str,
    expires_at: dt.datetime,
) -> UnverifiedUser:
    with translate_errors("create unverified user"):
        return await UnverifiedUser.create(
            username=username,
            email=email,
            password_hash=password_hash,
            verification_token=token,
            verification_expires=expires_at,
        )


async def consume_verification_token(token: str) -> Optional[UnverifiedUser]:
    """
    Find and delete the pending registration for a live token.

    Unknown, expired and already consumed tokens all return None. The DELETE
    is the decision point: when two requests race on one token only the one
    that actually removed the row gets it back.
    """
    with translate_errors("consume verification token"):
        pending = await UnverifiedUser.get_or_none(
            verification_token=token,
            verification_expires__gt=utc_now(),
        )
        if pending is None:
            return None
        deleted = await UnverifiedUser.filter(id=pending.id).delete()
        if not deleted:
            return None
        return pending


async def purge_expired() -> int:
    """Delete pending registrations whose verification window has passed."""
    with translate_errors("purge expired unverified users"):
        return await UnverifiedUser.filter(verification_expires__lte=utc_now()).delete()
