"""
Account lifecycle: registration with email verification, login, password
reset, Google account linking and per-user display settings.

Each public coroutine performs a short sequence of store / credential / mail
calls and returns a Result. Nothing raises past these functions: expected
outcomes (unknown user, bad token, taken username, wrong password) and
backend failures alike come back as a Failure. Internal error text is only
logged, never put in the returned message.

Verification and reset tokens are emailed in clear and stored as their
SHA-256 digest.
"""
import datetime as dt
import logging
from typing import Optional

from fakeso.config import settings
from fakeso.core.mailer import MailError, send_email
from fakeso.core.security import deterministic_hash, hash_password, random_token, verify_password
from fakeso.models.user import SETTINGS_FIELDS, User
from fakeso.services.result import CONFLICT, INVALID_CREDENTIALS, MECHANICAL, NOT_FOUND, Result
from fakeso.stores import StoreError, unverified_store, user_store
from fakeso.stores.base import utc_now

logger = logging.getLogger("uvicorn.error")

# What passlib / secrets raise when hashing or random generation breaks
_CRYPTO_ERRORS = (ValueError, TypeError, RuntimeError, OSError)

GOOGLE_USERNAME_ATTEMPTS = 3

# Wording used in "Error changing user <label>"
SETTINGS_LABELS = {
    "theme": "theme",
    "textSize": "text size",
    "textBoldness": "text boldness",
    "font": "font style",
    "lineSpacing": "line spacing",
    "backgroundColor": "background color",
    "textColor": "text color",
    "buttonColor": "button color",
}

USERNAME_NOT_FOUND = "Username does not exist"
USERNAME_TAKEN = "Username is already taken"


def _link(path: str, token: str) -> str:
    return f"{settings.client_url.rstrip('/')}/{path}/{token}"


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------
async def request_verification(username: str, email: str, password: str) -> Result:
    """
    Start a registration: store it as an unverified user and email the
    verification link. Success data is {"emailRecipient": email}.

    If the email cannot be sent the pending registration stays behind; it
    expires on its own.
    """
    try:
        if await user_store.find_by_username(username) is not None:
            return Result.failure(CONFLICT, USERNAME_TAKEN)
        if await user_store.find_by_email(email) is not None:
            return Result.failure(CONFLICT, "Email is already registered")
    except StoreError:
        logger.exception("[accounts] lookup failed while registering %s", username)
        return Result.failure(MECHANICAL, "Error checking for an existing user")

    try:
        password_hash = hash_password(password)
    except _CRYPTO_ERRORS:
        logger.exception("[accounts] password hashing failed while registering %s", username)
        return Result.failure(MECHANICAL, "Error hashing password")

    try:
        token = random_token()
        token_digest = deterministic_hash(token)
    except _CRYPTO_ERRORS:
        logger.exception("[accounts] token generation failed while registering %s", username)
        return Result.failure(MECHANICAL, "Error generating verification token")

    expires_at = utc_now() + dt.timedelta(hours=settings.verify_token_hours)
    try:
        await unverified_store.create_unverified_user(
            username=username,
            email=email,
            password_hash=password_hash,
            token=token_digest,
            expires_at=expires_at,
        )
    except StoreError:
        logger.exception("[accounts] could not store pending registration for %s", username)
        return Result.failure(MECHANICAL, "Error when creating an unverified user")

    try:
        await send_email(
            email,
            "Verify your email",
            "Welcome! Please verify your email by opening this link:\n\n"
            f"{_link('verify-email', token)}\n\n"
            f"This link expires in {settings.verify_token_hours} hours.",
        )
    except MailError:
        logger.exception("[accounts] verification email to %s failed", email)
        return Result.failure(MECHANICAL, "Error sending verification email")

    logger.info("[accounts] verification email sent -> username=%s email=%s", username, email)
    return Result.success({"emailRecipient": email})


async def activate_user(token: str) -> Result:
    """Consume a verification token and turn the pending registration into a User."""
    try:
        pending = await unverified_store.consume_verification_token(deterministic_hash(token))
    except StoreError:
        logger.exception("[accounts] could not consume verification token")
        return Result.failure(MECHANICAL, "Error when creating a user")

    if pending is None:
        return Result.failure(NOT_FOUND, "Email verification token is invalid or has expired")

    try:
        user = await user_store.create_user(
            username=pending.username,
            email=pending.email,
            password_hash=pending.password_hash,
            created_at=pending.created_at,
        )
    except StoreError as exc:
        if exc.is_conflict:
            # Another registration for the same username / email was verified first
            return Result.failure(CONFLICT, USERNAME_TAKEN)
        logger.exception("[accounts] could not create user %s", pending.username)
        return Result.failure(MECHANICAL, "Error when creating a user")

    logger.info("[accounts] user activated -> username=%s id=%s", user.username, user.id)
    return Result.success(user)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
async def login(username: str, password: str) -> Result:
    try:
        user = await user_store.find_by_username(username)
    except StoreError:
        logger.exception("[accounts] lookup failed while logging in %s", username)
        return Result.failure(MECHANICAL, "Error logging in user")

    if user is None:
        return Result.failure(NOT_FOUND, USERNAME_NOT_FOUND)

    try:
        matches = verify_password(password, user.password_hash)
    except _CRYPTO_ERRORS:
        logger.exception("[accounts] password check failed for %s", username)
        return Result.failure(MECHANICAL, "Error logging in user")

    if not matches:
        return Result.failure(INVALID_CREDENTIALS, "Incorrect password")
    return Result.success(user)


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------
async def request_password_reset(username: str) -> Result:
    """Attach a fresh reset token to the user and email it. Success data is {"emailRecipient": email}."""
    try:
        token = random_token()
        token_digest = deterministic_hash(token)
    except _CRYPTO_ERRORS:
        logger.exception("[accounts] reset token generation failed for %s", username)
        return Result.failure(MECHANICAL, "Error generating password reset token")

    expires_at = utc_now() + dt.timedelta(minutes=settings.reset_token_minutes)
    try:
        user = await user_store.set_reset_token(username, token_digest, expires_at)
    except StoreError:
        logger.exception("[accounts] could not store reset token for %s", username)
        return Result.failure(MECHANICAL, "Error updating password reset token")

    if user is None:
        return Result.failure(NOT_FOUND, USERNAME_NOT_FOUND)

    try:
        await send_email(
            user.email,
            "Reset your password",
            "Use this link to reset your password:\n\n"
            f"{_link('reset-password', token)}\n\n"
            "If you did not request this, ignore the email.",
        )
    except MailError:
        logger.exception("[accounts] reset email to %s failed", user.email)
        return Result.failure(MECHANICAL, "Error sending password reset email")

    logger.info("[accounts] password reset email sent -> username=%s", username)
    return Result.success({"emailRecipient": user.email})


async def reset_password(token: str, new_password: str) -> Result:
    try:
        password_hash = hash_password(new_password)
        token_digest = deterministic_hash(token)
    except _CRYPTO_ERRORS:
        logger.exception("[accounts] hashing failed while resetting password")
        return Result.failure(MECHANICAL, "Error resetting password")

    try:
        user = await user_store.consume_reset_token(token_digest, password_hash)
    except StoreError:
        logger.exception("[accounts] could not consume reset token")
        return Result.failure(MECHANICAL, "Error resetting password")

    if user is None:
        return Result.failure(NOT_FOUND, "Password reset token is invalid or has expired")

    logger.info("[accounts] password reset -> username=%s", user.username)
    return Result.success(user)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
async def _update_settings(username: str, values: dict, label: str) -> Result:
    try:
        if values:
            user = await user_store.update_settings(username, values)
        else:
            user = await user_store.find_by_username(username)
    except StoreError:
        logger.exception("[accounts] settings update failed for %s", username)
        return Result.failure(MECHANICAL, f"Error changing user {label}")

    if user is None:
        return Result.failure(NOT_FOUND, USERNAME_NOT_FOUND)
    return Result.success(user)


async def change_setting(username: str, field: str, value: str) -> Result:
    """Set a single display setting, `field` being its API name (e.g. "textSize")."""
    if field not in SETTINGS_FIELDS:
        raise KeyError(f"Unknown settings field: {field}")
    return await _update_settings(username, {field: value}, SETTINGS_LABELS[field])


async def change_settings(username: str, values: dict) -> Result:
    """Set several display settings at once; None values are left untouched."""
    unknown = set(values) - set(SETTINGS_FIELDS)
    if unknown:
        raise KeyError(f"Unknown settings fields: {sorted(unknown)}")
    values = {k: v for k, v in values.items() if v is not None}
    return await _update_settings(username, values, "settings")


async def change_theme(username: str, theme: str) -> Result:
    return await change_setting(username, "theme", theme)


async def change_text_size(username: str, text_size: str) -> Result:
    return await change_setting(username, "textSize", text_size)


async def change_text_boldness(username: str, text_boldness: str) -> Result:
    return await change_setting(username, "textBoldness", text_boldness)


async def change_font(username: str, font: str) -> Result:
    return await change_setting(username, "font", font)


async def change_line_spacing(username: str, line_spacing: str) -> Result:
    return await change_setting(username, "lineSpacing", line_spacing)


async def change_background_color(username: str, background_color: str) -> Result:
    return await change_setting(username, "backgroundColor", background_color)


async def change_text_color(username: str, text_color: str) -> Result:
    return await change_setting(username, "textColor", text_color)


async def change_button_color(username: str, button_color: str) -> Result:
    return await change_setting(username, "buttonColor", button_color)


# ---------------------------------------------------------------------------
# Google linking
# ---------------------------------------------------------------------------
def google_username(email: str, seed: str) -> str:
    """<local part of email>_<first 6 hex chars of sha256(seed)>"""
    local_part = email.split("@", 1)[0]
    return f"{local_part}_{deterministic_hash(seed)[:6]}"


async def _find_or_create_google_user(google_id: str, email: str) -> User:
    user = await user_store.find_by_google_id(google_id)
    if user is not None:
        return user

    # No usable password: Google is the only way into this account
    password_hash = hash_password(random_token())

    last_error: Optional[StoreError] = None
    for attempt in range(GOOGLE_USERNAME_ATTEMPTS):
        seed = google_id if attempt == 0 else google_id + random_token()
        try:
            return await user_store.create_user(
                username=google_username(email, seed),
                email=email,
                password_hash=password_hash,
                google_id=google_id,
            )
        except StoreError as exc:
            if not exc.is_conflict:
                raise
            last_error = exc
            # Same Google account linked concurrently
            existing = await user_store.find_by_google_id(google_id)
            if existing is not None:
                return existing
            # Email belongs to another account; a new username will not help
            if await user_store.find_by_email(email) is not None:
                raise
            logger.info("[accounts] google username collision for %s, retrying", email)
    raise last_error


async def find_or_create_google_user(google_id: str, email: str) -> Result:
    """Return the user linked to `google_id`, creating one on first login."""
    try:
        user = await _find_or_create_google_user(google_id, email)
    except (StoreError, *_CRYPTO_ERRORS):
        logger.exception("[accounts] google user lookup/creation failed for %s", email)
        return Result.failure(MECHANICAL, "Error when retrieving or creating a Google user")
    return Result.success(user)


async def purge_expired_registrations() -> int:
    """Remove pending registrations whose verification link has expired."""
    removed = await unverified_store.purge_expired()
    if removed:
        logger.info("[accounts] purged %s expired pending registrations", removed)
    return removed
