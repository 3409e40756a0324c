"""
Services Module

- accounts: account lifecycle operations (registration, login, password
  reset, Google linking, display settings), each returning a Result
- google_oauth: Google OAuth 2.0 code exchange client
"""
from .result import Result, Failure
from .google_oauth import google_client, GoogleIdentity, GoogleOAuthError

__all__ = [
    "Result",
    "Failure",
    "google_client",
    "GoogleIdentity",
    "GoogleOAuthError",
]
