# fakeso/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request models for registration, verification, login and password reset.
"""
from pydantic import BaseModel

class RegisterIn(BaseModel):
    """Registration request; nothing is stored as a user until the email is verified."""
    username: str
    email: str
    password: str  # Plain text, hashed server-side

class VerifyEmailIn(BaseModel):
    token: str  # Token from the verification link

class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    Contains credentials for authentication.
    """
    username: str  # User login name
    password: str  # User password (plain text, checked against the stored hash)

class ForgotPasswordIn(BaseModel):
    username: str

class ResetPasswordIn(BaseModel):
    token: str  # Token from the reset link
    newPassword: str
