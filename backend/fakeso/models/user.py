# fakeso/models/user.py
"""
Database model for users.
Represents an activated user account, containing authentication credentials,
password reset state, an optional linked Google identity and display settings.
"""
import uuid
from typing import Optional
from tortoise import fields, models

# Settings field name (API / camelCase) -> column name on the users table
SETTINGS_FIELDS = {
    "theme": "theme",
    "textSize": "text_size",
    "textBoldness": "text_boldness",
    "font": "font",
    "lineSpacing": "line_spacing",
    "backgroundColor": "background_color",
    "textColor": "text_color",
    "buttonColor": "button_color",
}


class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Username and email must be unique across all users
    - reset_token is single-use and only valid until reset_token_expires

    Settings:
    - Each display preference lives in its own nullable column so that a
      single-field change is one atomic UPDATE that never touches the others.
    - `settings` returns them as one record, or None until the first is set.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    username = fields.CharField(
        max_length=256,
        unique=True,
        index=True
    )  # User login name (must be unique, indexed for fast lookups)
    email = fields.CharField(max_length=256, unique=True)  # User email address (must be unique)
    password_hash = fields.CharField(max_length=255)  # Hashed password (argon2, never plain text)
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    reset_token = fields.CharField(max_length=128, null=True, index=True)  # Pending password reset token
    reset_token_expires = fields.DatetimeField(null=True)  # Reset token expiry (UTC)
    google_id = fields.CharField(max_length=128, null=True, unique=True)  # Linked Google account subject

    # Display settings
    theme = fields.CharField(max_length=64, null=True)
    text_size = fields.CharField(max_length=64, null=True)
    text_boldness = fields.CharField(max_length=64, null=True)
    font = fields.CharField(max_length=64, null=True)
    line_spacing = fields.CharField(max_length=64, null=True)
    background_color = fields.CharField(max_length=64, null=True)
    text_color = fields.CharField(max_length=64, null=True)
    button_color = fields.CharField(max_length=64, null=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name

    @property
    def settings(self) -> Optional[dict]:
        values = {name: getattr(self, column) for name, column in SETTINGS_FIELDS.items()}
        if all(v is None for v in values.values()):
            return None
        return values
