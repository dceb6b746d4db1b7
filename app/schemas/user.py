from pydantic import EmailStr
from typing import Optional
from app.schemas.base import CamelModel


class UserCreateRequest(CamelModel):
    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = None
    firebase_uid: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    firebase_uid: Optional[str] = None
    role: str
    status: str
    created_at: str


class UserCreateResponse(CamelModel):
    message: Optional[str] = None
    inserted_id: Optional[str] = None
    user: Optional[UserResponse] = None


class RoleResponse(CamelModel):
    role: str
