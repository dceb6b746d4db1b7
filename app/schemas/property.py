from pydantic import Field
from typing import Optional
from app.schemas.base import CamelModel


class PropertyResponse(CamelModel):
    id: str
    title: str
    location: str
    image: Optional[str] = None
    description: Optional[str] = None
    min_price: float
    max_price: float
    agent_name: Optional[str] = None
    agent_email: str
    agent_image: Optional[str] = None
    verification_status: str
    advertised: bool
    created_at: str
    updated_at: str


class VerifiedPropertyResponse(PropertyResponse):
    average_price: float


class PropertyCreateRequest(CamelModel):
    title: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    image: Optional[str] = None
    description: Optional[str] = None
    min_price: float = Field(..., ge=0)
    max_price: float = Field(..., ge=0)
    agent_name: Optional[str] = None
    agent_image: Optional[str] = None


class PropertyUpdateRequest(CamelModel):
    title: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
