from fastapi import APIRouter, Depends
from typing import List
from app.schemas.user import UserCreateRequest, UserCreateResponse, UserResponse, RoleResponse
from app.schemas.base import MessageResponse
from app.services.user_service import (
    create_user,
    get_all_users,
    get_user_role,
    set_user_role,
    mark_user_as_fraud,
    delete_user,
    ROLE_ADMIN,
    ROLE_AGENT,
)
from app.utils.dependencies import get_current_user_email, require_role

router = APIRouter(prefix="/users", tags=["Users"])


class FraudResponse(MessageResponse):
    rejected_properties: int


class UserDeleteResponse(MessageResponse):
    deleted_count: int


@router.post("", response_model=UserCreateResponse)
async def register_user(request: UserCreateRequest):
    """Create the user on first sign-in. Roles are only granted by an admin."""
    user_data = request.dict(exclude_unset=True)
    created, user = await create_user(user_data)

    if not created:
        return UserCreateResponse(message="User already exists", user=UserResponse(**user))

    return UserCreateResponse(message="User created", inserted_id=user["id"], user=UserResponse(**user))


@router.get("", response_model=List[UserResponse], dependencies=[Depends(require_role(ROLE_ADMIN))])
async def list_users():
    """Get all users (Admin only)"""
    users = await get_all_users()
    return [UserResponse(**user) for user in users]


@router.get("/{email}/role", response_model=RoleResponse, dependencies=[Depends(get_current_user_email)])
async def get_role(email: str):
    """Role directory lookup"""
    role = await get_user_role(email)
    return RoleResponse(role=role)


@router.patch("/admin/{user_id}", response_model=UserResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def make_admin(user_id: str):
    """Promote a user to admin (Admin only)"""
    user = await set_user_role(user_id, ROLE_ADMIN)
    return UserResponse(**user)


@router.patch("/agent/{user_id}", response_model=UserResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def make_agent(user_id: str):
    """Promote a user to agent (Admin only)"""
    user = await set_user_role(user_id, ROLE_AGENT)
    return UserResponse(**user)


@router.patch("/fraud/{user_id}", response_model=FraudResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def mark_fraud(user_id: str):
    """Flag an agent as fraud and reject all of their properties (Admin only)"""
    result = await mark_user_as_fraud(user_id)
    return FraudResponse(**result)


@router.delete("/{user_id}", response_model=UserDeleteResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def remove_user(user_id: str):
    """Delete a user from the identity provider and the database (Admin only)"""
    result = await delete_user(user_id)
    return UserDeleteResponse(**result)
