# fakeso/stores/__init__.py
"""
Store adapters over the Tortoise models.
- user_store: activated users (lookup, create, reset token, settings)
- unverified_store: pending registrations keyed by verification token
"""
from .base import StoreError, CONFLICT, MECHANICAL
