from fastapi import APIRouter, Depends
from app.modules.auth.schemas import LoginRequest, OperatorSession, PasswordResetRequest, TokenResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_operator, get_sign_in_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_sign_in_service)
):
    """Sign in and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    operator: OperatorSession = Depends(get_current_operator),
    service: AuthService = Depends(get_auth_service)
):
    """Revoke the presented session and drop it from the cache"""
    service.logout(operator)
    return {"message": "Logged out successfully"}


@router.post("/password-reset", status_code=202)
async def send_password_reset(
    reset_data: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password reset email"""
    service.send_password_reset(reset_data)
    return {"message": "Password reset email sent. Please check your inbox."}


@router.get("/me")
async def get_current_user(
    operator: OperatorSession = Depends(get_current_operator),
):
    """Get the signed-in operator"""
    return operator.model_dump(exclude={"access_token"})
