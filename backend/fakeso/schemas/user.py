# fakeso/schemas/user.py
"""
Pydantic schemas for user payloads.
Users leave the API without password hash and reset token fields.
"""
from typing import Optional
from pydantic import BaseModel

from fakeso.models.user import User

class SettingsInfo(BaseModel):
    """Per-user display preferences; a field is None until first set."""
    theme: Optional[str] = None
    textSize: Optional[str] = None
    textBoldness: Optional[str] = None
    font: Optional[str] = None
    lineSpacing: Optional[str] = None
    backgroundColor: Optional[str] = None
    textColor: Optional[str] = None
    buttonColor: Optional[str] = None

class UserOut(BaseModel):
    """
    User information returned by the API.
    Contains no credential material.
    """
    id: str  # User unique identifier
    username: str  # User login name
    email: str  # User email address
    createdAt: Optional[str] = None  # Account creation timestamp (ISO format)
    settings: Optional[SettingsInfo] = None  # None until the first setting is changed
    googleLinked: bool = False  # Whether a Google account is linked

def user_out(u: User) -> dict:
    """Convert a User model instance to the dictionary returned by the API."""
    return UserOut(
        id=str(u.id),
        username=u.username,
        email=u.email,
        createdAt=u.created_at.isoformat() if u.created_at else None,
        settings=u.settings,
        googleLinked=u.google_id is not None,
    ).model_dump()
