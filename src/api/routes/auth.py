"""Authentication routes.

This module handles HTTP endpoints for user authentication and provides the
authentication and admin authorization dependencies used by every other
router.
"""

from datetime import datetime, timedelta
from typing import Annotated, Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET
from core.dependencies import UserManagerDep
from core.exceptions import (
    InactiveAccountError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from models.enums import UserRole, UserStatus
from models.user import UserModel
from schemas.user import LoginRequest, LoginResponse, TokenResponse, User


router = APIRouter(prefix="/api/auth", tags=["Auth"])

# HTTP Bearer token security; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)

TOKEN_MISSING_MESSAGE = "Token de autenticação não fornecido"
TOKEN_INVALID_MESSAGE = "Token inválido ou expirado"
ADMIN_ONLY_MESSAGE = "Acesso restrito a administradores"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def create_user_token(user: UserModel) -> str:
    """Sign a token whose subject is the user's ID."""
    return create_access_token(data={"sub": user.id, "role": user.role.value})


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials, None when the header is
            missing or does not use the Bearer scheme.

    Returns:
        Decoded token payload.

    Raises:
        HTTPException: If the token is missing, invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=TOKEN_MISSING_MESSAGE,
        )
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=TOKEN_INVALID_MESSAGE,
        )
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=TOKEN_INVALID_MESSAGE,
        )
    return payload


def get_current_user(
    token_payload: dict = Depends(verify_token),
    user_manager: UserManagerDep = None,
) -> UserModel:
    """Get current authenticated user.

    Args:
        token_payload: Decoded JWT token payload.
        user_manager: Injected UserManager instance.

    Returns:
        The UserModel named by the token, department loaded.

    Raises:
        HTTPException: If the user no longer exists or is inactive.
    """
    try:
        user = user_manager.get_user(token_payload["sub"])
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    if user.status == UserStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=InactiveAccountError.message,
        )
    return user


def require_admin(
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    """Allow the request through only for ADMIN users.

    Raises:
        HTTPException: If the current user is not an admin.
    """
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ADMIN_ONLY_MESSAGE,
        )
    return current_user


CurrentUser = Annotated[UserModel, Depends(get_current_user)]
AdminUser = Annotated[UserModel, Depends(require_admin)]


@router.post("/login", response_model=LoginResponse, summary="Login")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep = None,
) -> LoginResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.

    Returns:
        LoginResponse with user information and JWT token.

    Raises:
        HTTPException: If the credentials are wrong or the account is inactive.
    """
    try:
        user = user_manager.authenticate(req.email, req.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except InactiveAccountError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )

    return LoginResponse(token=create_user_token(user), user=User.model_validate(user))


@router.get("/me", response_model=User, summary="Current user")
def get_current_user_info(current_user: CurrentUser) -> User:
    """Get current authenticated user information."""
    return User.model_validate(current_user)


@router.post("/refresh-token", response_model=TokenResponse, summary="Refresh token")
def refresh_token(current_user: CurrentUser) -> TokenResponse:
    """Issue a freshly signed token for the current user."""
    return TokenResponse(token=create_user_token(current_user))
