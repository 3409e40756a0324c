# fakeso/core/security.py
"""
Security module for authentication and authorization.
Handles password hashing, random/deterministic token generation, and JWT
token creation/validation.
"""
import os
import hashlib
import secrets
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from project root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# Password hashing context
# Argon2 is a modern, secure password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))  # Token expiration time in minutes
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)

# Default size of verification / reset tokens, in random bytes
TOKEN_BYTES = 20

def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns True if the password matches, False if it does not.
    A stored hash that cannot be identified or parsed raises ValueError;
    callers treat that as a mechanical failure, not as a mismatch.
    """
    return pwd_context.verify(plain, hashed)

def random_token(nbytes: int = TOKEN_BYTES) -> str:
    """Return a hex string built from `nbytes` cryptographically secure random bytes."""
    return secrets.token_hex(nbytes)

def deterministic_hash(value: str) -> str:
    """SHA-256 hex digest of `value` (same input, same output)."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()

def create_access_token(user_id: str) -> str:
    """
    Create a JWT access token for user authentication.

    Token payload includes:
        - sub / userId: Subject (user ID)
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.utcnow()
    payload = {
        "sub": user_id,     # Subject (user ID)
        "userId": user_id,  # Kept for clients that read userId directly
        "iat": now,         # Issued at timestamp
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),  # Expiration timestamp
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
