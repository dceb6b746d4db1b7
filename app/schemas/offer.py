from pydantic import Field
from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel


class OfferResponse(CamelModel):
    id: str
    property_id: str
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: str
    buyer_email: str
    buyer_name: Optional[str] = None
    offer_amount: float
    buying_date: str
    status: str
    transaction_id: Optional[str] = None
    paid_at: Optional[str] = None
    created_at: str


class OfferCreateRequest(CamelModel):
    """Presence of the reference fields is checked by the offer service (400, not 422)"""
    property_id: Optional[str] = None
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    property_image: Optional[str] = None
    agent_name: Optional[str] = None
    agent_email: Optional[str] = None
    buyer_email: Optional[str] = None
    buyer_name: Optional[str] = None
    offer_amount: Optional[float] = None
    buying_date: Optional[str] = None
    wishlist_id: Optional[str] = None


class OfferPaymentRequest(CamelModel):
    transaction_id: str = Field(..., min_length=1)
    paid_at: Optional[datetime] = None
    status: Optional[str] = None  # Accepted for older clients, must be 'bought' when sent


class OfferAcceptResponse(CamelModel):
    message: str
    accepted_offer_id: str
    rejected_count: int


class BoughtStatusResponse(CamelModel):
    bought_status: str
    offer_id: str


class SoldTotalResponse(CamelModel):
    total_amount: float
