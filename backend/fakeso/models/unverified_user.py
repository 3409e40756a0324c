# fakeso/models/unverified_user.py
"""
Database model for pending registrations.
A row is created when someone registers and is consumed (deleted) when the
emailed verification link is opened; unconsumed rows expire.
"""
import uuid
from tortoise import fields, models

class UnverifiedUser(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    username = fields.CharField(max_length=256, index=True)  # Not unique: only checked against activated users
    email = fields.CharField(max_length=256)
    password_hash = fields.CharField(max_length=255)
    created_at = fields.DatetimeField(auto_now_add=True)  # Carried over to the activated User

    verification_token = fields.CharField(max_length=128, unique=True)
    verification_expires = fields.DatetimeField(index=True)

    class Meta:
        table = "unverified_users"
