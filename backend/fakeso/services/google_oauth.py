"""
Google OAuth 2.0 / OpenID Connect client.

Only the authorization-code flow is supported:
1. send the browser to `authorization_url()`
2. Google redirects back with ?code=...
3. `fetch_identity(code)` exchanges the code and returns the account's
   subject id and email
"""
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from fakeso.config import settings


class GoogleOAuthError(Exception):
    """Google rejected the code or returned an unusable identity."""


@dataclass
class GoogleIdentity:
    google_id: str  # OpenID "sub", stable per Google account
    email: str


class GoogleOAuthClient:
    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(settings.google_client_id and settings.google_client_secret)

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": settings.google_client_id,
            "redirect_uri": settings.google_redirect_uri,
            "response_type": "code",
            "scope": "openid email",
            "state": state,
            "prompt": "select_account",
        }
        return f"{settings.google_auth_url}?{urlencode(params)}"

    async def fetch_identity(self, code: str) -> GoogleIdentity:
        if not self.is_configured():
            raise GoogleOAuthError("GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET are missing")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                token_resp = await client.post(
                    settings.google_token_url,
                    data={
                        "code": code,
                        "client_id": settings.google_client_id,
                        "client_secret": settings.google_client_secret,
                        "redirect_uri": settings.google_redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                token_resp.raise_for_status()
                access_token = token_resp.json().get("access_token")
                if not access_token:
                    raise GoogleOAuthError("token response has no access_token")

                info_resp = await client.get(
                    settings.google_userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                info_resp.raise_for_status()
                info = info_resp.json()
        except httpx.HTTPError as exc:
            raise GoogleOAuthError(f"Google request failed: {exc}") from exc

        google_id = info.get("sub")
        email = info.get("email")
        if not google_id or not email:
            raise GoogleOAuthError("userinfo is missing sub or email")
        return GoogleIdentity(google_id=str(google_id), email=email)


google_client = GoogleOAuthClient()
