import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "FakeSO Accounts API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Frontend base URL used to build links in outgoing emails and OAuth redirects
    client_url: str = os.getenv("CLIENT_URL", "http://localhost:3000")

    # Token lifetimes
    verify_token_hours: int = int(os.getenv("VERIFY_TOKEN_HOURS", "24"))
    reset_token_minutes: int = int(os.getenv("RESET_TOKEN_MINUTES", "60"))

    # SMTP Settings (fastapi-mail)
    # SEND_EMAILS=false logs messages instead of delivering them (dev / tests)
    send_emails: bool = _env_flag("SEND_EMAILS", "false")
    smtp_host: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    smtp_username: str = os.getenv("SMTP_USERNAME", "")
    smtp_password: str = os.getenv("SMTP_PASSWORD", "")
    smtp_from: str = os.getenv("SMTP_FROM", "noreply@fakeso.dev")
    smtp_starttls: bool = _env_flag("SMTP_STARTTLS", "true")
    smtp_ssl_tls: bool = _env_flag("SMTP_SSL_TLS", "false")

    # Google OAuth Settings
    google_client_id: str | None = os.getenv("GOOGLE_CLIENT_ID")
    google_client_secret: str | None = os.getenv("GOOGLE_CLIENT_SECRET")
    google_redirect_uri: str = os.getenv(
        "GOOGLE_REDIRECT_URI", "http://localhost:8000/api/v1/auth/google/callback"
    )
    google_auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_userinfo_url: str = "https://openidconnect.googleapis.com/v1/userinfo"

settings = Settings()  # Instantiate configuration
