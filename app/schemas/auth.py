from pydantic import EmailStr
from typing import Optional
from app.schemas.base import CamelModel


class TokenRequest(CamelModel):
    email: EmailStr
    name: Optional[str] = None


class TokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"
