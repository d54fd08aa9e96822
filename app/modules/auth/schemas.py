from pydantic import BaseModel, EmailStr
from typing import Literal, Optional, Dict, Any
from enum import Enum


class AuthErrorKind(str, Enum):
    USER_NOT_FOUND = "user_not_found"
    INVALID_IDENTIFIER = "invalid_identifier"
    GENERIC_FAILURE = "generic_failure"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    remember_me: bool = False


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    # "local" survives browser restarts, "session" ends with the tab
    persistence: Literal["local", "session"]
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class PasswordResetRequest(BaseModel):
    email: str


class OperatorSession(BaseModel):
    """Authenticated operator, resolved from the bearer token on every request."""
    id: str
    email: Optional[str] = None
    access_token: str
    user_metadata: Dict[str, Any] = {}
