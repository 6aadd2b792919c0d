"""Registration, login and token refresh, plus the auth dependencies used by every router."""

from typing import Annotated, Callable

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskboard.core.config import Settings
from taskboard.core.database import get_db
from taskboard.core.errors import UnauthorizedError
from taskboard.core.policy import Action, authorize
from taskboard.core.security import TokenService
from taskboard.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
    TokenResponse,
)
from taskboard.services import users as user_service
from taskboard.services.directory import UserDirectory

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_directory(request: Request) -> UserDirectory:
    return request.app.state.user_directory


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return token_service.verify(credentials.credentials)


def require(action: Action) -> Callable[..., TokenClaims]:
    """Dependency factory: verified claims that pass the role part of the policy for ``action``."""

    def dependency(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
    ) -> TokenClaims:
        authorize(claims, action)
        return claims

    dependency.__name__ = f"require_{action.name.lower()}"
    return dependency


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """Create an account with role 'employee'. Emails are unique and stored lowercase."""
    user = user_service.create_account(
        db,
        directory,
        username=body.username,
        email=body.email,
        password=body.password,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    return RegisterResponse(message="User registered successfully", uid=user.id)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    token = user_service.login(db, token_service, body.email, body.password)
    return TokenResponse(message="Login successful", token=token)


@router.post("/token/refresh", response_model=TokenResponse)
def refresh(
    claims: Annotated[TokenClaims, Depends(require(Action.REFRESH_TOKEN))],
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Exchange a still-valid token for a fresh one carrying the current role."""
    token = user_service.refresh_token(db, token_service, claims)
    return TokenResponse(message="Token refreshed", token=token)
