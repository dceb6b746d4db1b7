from typing import Optional
from app.schemas.base import CamelModel


class WishlistResponse(CamelModel):
    id: str
    user_email: str
    property_id: str
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: Optional[str] = None
    agent_image: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    added_at: str


class WishlistCreateRequest(CamelModel):
    user_email: str
    property_id: str
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: Optional[str] = None
    agent_image: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class WishlistCreateResponse(CamelModel):
    acknowledged: bool
    message: Optional[str] = None
    inserted_id: Optional[str] = None


class WishlistCheckResponse(CamelModel):
    already_wishlisted: bool


class DeleteResponse(CamelModel):
    deleted_count: int
