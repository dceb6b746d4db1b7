from pydantic import Field
from typing import Optional
from app.schemas.base import CamelModel


class ReviewResponse(CamelModel):
    id: str
    property_id: str
    property_title: Optional[str] = None
    user_email: str
    user_name: Optional[str] = None
    user_image: Optional[str] = None
    agent_name: Optional[str] = None
    text: str
    posted_at: str


class ReviewCreateRequest(CamelModel):
    property_id: str = Field(..., min_length=1)
    property_title: Optional[str] = None
    user_name: Optional[str] = None
    user_image: Optional[str] = None
    agent_name: Optional[str] = None
    text: str = Field(..., min_length=1)
