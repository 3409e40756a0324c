# fakeso/schemas/settings.py
"""
Pydantic schemas for display settings endpoints.
"""
from pydantic import BaseModel

from .user import SettingsInfo

class SettingValueIn(BaseModel):
    """New value for a single settings field."""
    value: str

class SettingsIn(BaseModel):
    """Bulk update; only fields that are present (not None) are changed."""
    settings: SettingsInfo
