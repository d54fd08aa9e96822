"""
Core dependencies for route protection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_session_client, get_supabase
from app.modules.auth.schemas import OperatorSession
from app.modules.auth.service import AuthService
from supabase import Client

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_sign_in_service(session_client: Client = Depends(get_session_client)) -> AuthService:
    """Auth service over a per-request client; sign-in leaves the shared client untouched"""
    return AuthService(session_client)


def get_current_operator(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> OperatorSession:
    """Resolve the operator session from the bearer token; every roster route depends on this"""
    return auth_service.get_current_operator(credentials.credentials)
