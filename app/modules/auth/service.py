import hashlib
import time
from supabase import Client
from email_validator import validate_email, EmailNotValidError
from app.modules.auth.schemas import (
    AuthErrorKind, LoginRequest, OperatorSession, PasswordResetRequest, TokenResponse
)
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_operator to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

AUTH_ERROR_STATUS = {
    AuthErrorKind.USER_NOT_FOUND: 404,
    AuthErrorKind.INVALID_IDENTIFIER: 400,
    AuthErrorKind.GENERIC_FAILURE: 500,
}

PASSWORD_RESET_MESSAGES = {
    AuthErrorKind.USER_NOT_FOUND: "No user found with this email address",
    AuthErrorKind.INVALID_IDENTIFIER: "Invalid email address",
    AuthErrorKind.GENERIC_FAILURE: "Failed to send password reset email",
}


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def classify_auth_error(error_message: str) -> AuthErrorKind:
    """Map an auth provider error message onto the kinds shown to the operator"""
    message = error_message.lower()
    if "user not found" in message or "no user" in message:
        return AuthErrorKind.USER_NOT_FOUND
    if "invalid email" in message or "unable to validate email" in message or "invalid format" in message:
        return AuthErrorKind.INVALID_IDENTIFIER
    return AuthErrorKind.GENERIC_FAILURE


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate operator using Supabase Auth.

        remember_me selects durable ("local") persistence and hands out the refresh
        token; otherwise the session is scoped to the access token's lifetime.
        """
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            session = auth_response.session
            logger.info(f"Operator {auth_response.user.id} signed in (remember_me={login_data.remember_me})")
            return TokenResponse(
                access_token=session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email,
                persistence="local" if login_data.remember_me else "session",
                refresh_token=session.refresh_token if login_data.remember_me else None,
                expires_in=getattr(session, "expires_in", None),
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            logger.warning(f"Sign in failed for {login_data.email}: {error_message}")
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail="Failed to sign in")

    def send_password_reset(self, reset_data: PasswordResetRequest) -> None:
        """Dispatch a password-reset email through Supabase Auth"""
        try:
            email = validate_email(reset_data.email.strip(), check_deliverability=False).normalized
        except EmailNotValidError:
            raise self._reset_error(AuthErrorKind.INVALID_IDENTIFIER)

        options = {}
        if settings.password_reset_redirect_url:
            options["redirect_to"] = settings.password_reset_redirect_url
        try:
            self.supabase.auth.reset_password_for_email(email, options)
            logger.info(f"Password reset email requested for {email}")
        except Exception as e:
            logger.warning(f"Password reset failed for {email}: {e}")
            raise self._reset_error(classify_auth_error(str(e)))

    def _reset_error(self, kind: AuthErrorKind) -> HTTPException:
        return HTTPException(
            status_code=AUTH_ERROR_STATUS[kind],
            detail={"kind": kind.value, "message": PASSWORD_RESET_MESSAGES[kind]},
        )

    def get_current_operator(self, token: str) -> OperatorSession:
        """Resolve the operator behind a Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _cache_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                operator, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return operator
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            operator = OperatorSession(
                id=user.id,
                email=user.email,
                access_token=token,
                user_metadata=user.user_metadata or {},
            )
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (operator, now + _AUTH_CACHE_TTL_SEC)
            return operator
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, operator: OperatorSession) -> bool:
        """Tear down the operator session; the token must be re-validated if presented again"""
        _AUTH_USER_CACHE.pop(_cache_key(operator.access_token), None)
        try:
            # Only the session behind this token; other operators and devices stay signed in
            self.supabase.auth.admin.sign_out(operator.access_token, scope="local")
            logger.info(f"Operator {operator.id} signed out")
            return True
        except Exception as e:
            logger.warning(f"Sign out failed for operator {operator.id}: {e}")
            return False
