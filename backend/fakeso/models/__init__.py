# fakeso/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Activated user account (credentials, reset state, Google link, settings)
- UnverifiedUser: Pending registration waiting for email verification
"""
from .user import User, SETTINGS_FIELDS
from .unverified_user import UnverifiedUser
