# fakeso/stores/user_store.py
"""
Activated-user store.

Lookups return the User or None. Every write that depends on the current
state of a row (reset token still valid, username still present) is a single
conditional UPDATE whose affected-row count decides whether it happened, so
two concurrent requests can never both consume the same reset token.
"""
import datetime as dt
from typing import Optional

from fakeso.models.user import User, SETTINGS_FIELDS
from fakeso.stores.base import translate_errors, utc_now


async def find_by_username(username: str) -> Optional[User]:
    with translate_errors("find user by username"):
        return await User.get_or_none(username=username)


async def find_by_email(email: str) -> Optional[User]:
    with translate_errors("find user by email"):
        return await User.get_or_none(email=email)


async def find_by_google_id(google_id: str) -> Optional[User]:
    with translate_errors("find user by google id"):
        return await User.get_or_none(google_id=google_id)


async def create_user(
    username: str,
    email: str,
    password_hash: str,
    created_at: Optional[dt.datetime] = None,
    google_id: Optional[str] = None,
) -> User:
    """Insert a new user. A taken username / email / google id raises a conflict StoreError."""
    fields = {
        "username": username,
        "email": email,
        "password_hash": password_hash,
        "google_id": google_id,
    }
    if created_at is not None:
        fields["created_at"] = created_at
    with translate_errors("create user"):
        return await User.create(**fields)


async def set_reset_token(username: str, token: str, expires_at: dt.datetime) -> Optional[User]:
    """Store a password reset token on the user; None if the username does not exist."""
    with translate_errors("set reset token"):
        updated = await User.filter(username=username).update(
            reset_token=token,
            reset_token_expires=expires_at,
        )
        if not updated:
            return None
        return await User.get_or_none(username=username)


async def consume_reset_token(token: str, password_hash: str) -> Optional[User]:
    """
    Replace the password of the user holding a live reset token and clear the token.
    None if the token is unknown, expired or was consumed concurrently.
    """
    now = utc_now()
    with translate_errors("consume reset token"):
        user = await User.get_or_none(reset_token=token, reset_token_expires__gt=now)
        if user is None:
            return None
        updated = await User.filter(
            id=user.id,
            reset_token=token,
            reset_token_expires__gt=now,
        ).update(
            password_hash=password_hash,
            reset_token=None,
            reset_token_expires=None,
        )
        if not updated:
            return None
        await user.refresh_from_db()
        return user


async def update_settings(username: str, values: dict) -> Optional[User]:
    """
    Set one or more display settings (keyed by API name, e.g. "textSize").
    All given fields change in one UPDATE; None if the username does not exist.
    """
    columns = {SETTINGS_FIELDS[name]: value for name, value in values.items()}
    with translate_errors("update settings"):
        updated = await User.filter(username=username).update(**columns)
        if not updated:
            return None
        return await User.get_or_none(username=username)
