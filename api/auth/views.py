# api/auth/views.py
"""
Registration, login/logout and profile endpoints.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.users import db_manager as users_db
from core.context import AppContext, get_context
from core.cookies import clear_session_cookie, set_session_cookie
from core.deps import Identity, authorize
from core.policy import Operation
from .models import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    SessionUser,
    SuccessResponse,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a buyer or manager account",
)
async def register(
    payload: RegisterRequest,
    context: AppContext = Depends(get_context),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await users_db.register(
        db,
        context.hasher,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return SuccessResponse()


@router.post("/login", response_model=LoginResponse, summary="Login and start a session")
async def login(
    credentials: LoginRequest,
    response: Response,
    context: AppContext = Depends(get_context),
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    Verify credentials and set the session cookie.
    Suspended accounts are refused with 403.
    """
    user = await users_db.authenticate(db, context.hasher, credentials.email, credentials.password)

    token = context.tokens.issue({"sub": str(user.id), "email": user.email, "role": user.role})
    set_session_cookie(response, token, context.settings)

    return LoginResponse(user=SessionUser.model_validate(user))


@router.post("/logout", response_model=SuccessResponse, summary="End the session")
async def logout(
    response: Response,
    context: AppContext = Depends(get_context),
) -> SuccessResponse:
    clear_session_cookie(response, context.settings)
    return SuccessResponse()


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(
    identity: Identity = Depends(authorize(Operation.VIEW_PROFILE)),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Get the current authenticated user's profile."""
    user = await users_db.get_user_by_id(db, identity.id)
    return UserResponse.model_validate(user)
