# api/users/views.py
"""
Admin user management endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from api.auth.models import UserResponse
from core.deps import EntityId, Identity, authorize
from core.policy import Operation
from .models import SuspendRequest, UserListResponse, UserUpdate
from . import db_manager


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse, summary="List all users (admin)")
async def list_users(
    admin: Identity = Depends(authorize(Operation.LIST_USERS)),
    db: AsyncSession = Depends(get_session),
) -> UserListResponse:
    users = await db_manager.list_users(db)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=len(users),
    )


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID (admin)")
async def get_user(
    user_id: EntityId,
    admin: Identity = Depends(authorize(Operation.VIEW_USER)),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await db_manager.get_user_by_id(db, user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse, summary="Set role and status (admin)")
async def update_user(
    user_id: EntityId,
    updates: UserUpdate,
    admin: Identity = Depends(authorize(Operation.UPDATE_USER)),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await db_manager.set_role_and_status(
        db,
        user_id,
        role=updates.role,
        status=updates.status,
        acting_user_id=admin.id,
    )
    return UserResponse.model_validate(user)


@router.post("/{user_id}/suspend", response_model=UserResponse, summary="Suspend user (admin)")
async def suspend_user(
    user_id: EntityId,
    payload: SuspendRequest,
    admin: Identity = Depends(authorize(Operation.SUSPEND_USER)),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """
    Suspend an account. Takes effect on the user's next request even though
    their session token stays valid until it expires.
    """
    user = await db_manager.suspend(
        db,
        user_id,
        reason=payload.reason,
        feedback=payload.feedback,
        acting_user_id=admin.id,
    )
    return UserResponse.model_validate(user)
