import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from fakeso.api.v1.deps import get_current_user
from fakeso.config import settings
from fakeso.core.security import create_access_token, random_token
from fakeso.models.user import User
from fakeso.schemas.auth import (
    ForgotPasswordIn,
    LoginRequest,
    RegisterIn,
    ResetPasswordIn,
    VerifyEmailIn,
)
from fakeso.schemas.user import user_out
from fakeso.services import accounts
from fakeso.services.google_oauth import GoogleOAuthError, google_client
from fakeso.services.result import INVALID_CREDENTIALS, NOT_FOUND

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("uvicorn.error")

ACCESS_COOKIE = "accessToken"
GOOGLE_STATE_COOKIE = "googleOAuthState"
GOOGLE_STATE_MAX_AGE = 60 * 10


def _set_access_cookie(response: Response, user: User) -> str:
    token = create_access_token(str(user.id))
    response.set_cookie(ACCESS_COOKIE, token, httponly=True, secure=False, samesite="lax")
    return token


@router.post("/register")
async def register(body: RegisterIn):
    """
    Start a registration and email a verification link.

    Nothing becomes a usable account until /auth/verify-email is called with
    the emailed token.

    Returns:
        dict: {"success": True, "data": {"emailRecipient": ...}} or an error
        envelope (CONFLICT when the username / email is taken, MECHANICAL
        when storing or mailing failed)
    """
    # Basic validation, avoid pydantic error becoming 500
    if not body.username or not body.email or not body.password:
        return {"success": False, "error": {"code": "BAD_REQUEST", "message": "username/email/password required"}}
    result = await accounts.request_verification(body.username, body.email, body.password)
    return result.to_response()


@router.post("/verify-email")
async def verify_email(body: VerifyEmailIn, response: Response):
    """
    Complete a registration from the emailed token and log the new user in.

    Error codes:
        - NOT_FOUND: token unknown, already used or expired
        - CONFLICT: username was taken by another verified registration meanwhile
    """
    result = await accounts.activate_user(body.token)
    if not result.ok:
        return result.to_response()
    token = _set_access_cookie(response, result.data)
    return {"success": True, "data": {"user": user_out(result.data), "accessToken": token}}


@router.post("/login")
async def login(payload: LoginRequest, response: Response):
    """
    Authenticate user and create access token.

    The token is returned in the response body and also set as an HttpOnly
    cookie for browser-based clients.

    Raises:
        HTTPException (401): unknown username or incorrect password
        HTTPException (500): the credentials could not be checked
    """
    result = await accounts.login(payload.username, payload.password)
    if not result.ok:
        code = (
            status.HTTP_401_UNAUTHORIZED
            if result.error.kind in (NOT_FOUND, INVALID_CREDENTIALS)
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        raise HTTPException(status_code=code, detail=result.to_response()["error"])
    token = _set_access_cookie(response, result.data)
    return {"success": True, "data": {"user": user_out(result.data), "accessToken": token}}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """Return the currently authenticated user."""
    return {"success": True, "data": user_out(user)}


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the access token cookie. The JWT itself stays valid until it expires.
    """
    response.delete_cookie(ACCESS_COOKIE)
    return {"success": True}


@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordIn):
    """Email a password reset link to the account's address."""
    result = await accounts.request_password_reset(body.username)
    return result.to_response()


@router.post("/reset-password")
async def reset_password(body: ResetPasswordIn):
    """
    Set a new password using the emailed reset token.

    Error codes:
        - NOT_FOUND: token unknown, already used or expired
    """
    result = await accounts.reset_password(body.token, body.newPassword)
    return result.to_response(user_out)


@router.get("/google/login")
async def google_login():
    """Redirect the browser to Google's consent screen."""
    if not google_client.is_configured():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="GOOGLE_AUTH_NOT_CONFIGURED")
    state = random_token(16)
    response = RedirectResponse(google_client.authorization_url(state), status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        GOOGLE_STATE_COOKIE, state, httponly=True, secure=False, samesite="lax", max_age=GOOGLE_STATE_MAX_AGE
    )
    return response


@router.get("/google/callback")
async def google_callback(request: Request, code: str = "", state: str = ""):
    """
    Google redirects here after consent. Links (or creates) the local account,
    sets the access cookie and sends the browser back to the client app.
    """
    client_url = settings.client_url.rstrip("/")
    failed = RedirectResponse(f"{client_url}/login?error=google_auth_failed", status_code=status.HTTP_302_FOUND)
    failed.delete_cookie(GOOGLE_STATE_COOKIE)

    expected_state = request.cookies.get(GOOGLE_STATE_COOKIE)
    if not code or not state or state != expected_state:
        return failed

    try:
        identity = await google_client.fetch_identity(code)
    except GoogleOAuthError as exc:
        logger.warning("[google] code exchange failed: %s", exc)
        return failed

    result = await accounts.find_or_create_google_user(identity.google_id, identity.email)
    if not result.ok:
        return failed

    response = RedirectResponse(client_url, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(GOOGLE_STATE_COOKIE)
    _set_access_cookie(response, result.data)
    return response
