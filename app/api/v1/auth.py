"""Register, login, login-status and logout endpoints (cookie-based JWT sessions)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_auth_service
from app.core.database import get_db
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginStatusResponse,
    MessageResponse,
    RegisterRequest,
)
from app.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """
    Create an account. The first account ever registered becomes admin.
    No session is started; call /login afterwards.
    """
    auth.register(db, email=body.email, name=body.name, password=body.password)
    return MessageResponse(msg="Success!")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password. On success the signed session token
    is set as an HTTP-only cookie and the user projection (id, name, role) is returned.
    """
    claims, token = auth.login(db, email=body.email, password=body.password)
    auth.set_session_cookie(response, token)
    return LoginResponse(user=claims)


@router.get("/check-login-status", response_model=LoginStatusResponse)
def check_login_status(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginStatusResponse:
    """Report whether the session cookie holds a valid token. Never says why not."""
    token = request.cookies.get(auth.settings.SESSION_COOKIE_NAME)
    return LoginStatusResponse(is_logged_in=auth.check_login_status(token))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Clear the session cookie on the client."""
    auth.clear_session_cookie(response)
    return MessageResponse(msg="Logged out successfully")
