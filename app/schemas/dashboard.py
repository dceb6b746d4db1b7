from typing import List
from app.schemas.base import CamelModel, ChartPoint
from app.schemas.property import PropertyResponse
from app.schemas.offer import OfferResponse
from app.schemas.wishlist import WishlistResponse
from app.schemas.review import ReviewResponse
from app.schemas.user import UserResponse


class UserDashboardResponse(CamelModel):
    role: str
    wishlist_count: int
    bought_count: int
    review_count: int
    recent_wishlist: List[WishlistResponse]
    recent_reviews: List[ReviewResponse]
    chart_data: List[ChartPoint]


class AgentDashboardResponse(CamelModel):
    role: str
    added_properties: int
    requested_count: int
    sold_count: int
    sold_amount: float
    recent_properties: List[PropertyResponse]
    recent_offers: List[OfferResponse]
    pie_chart_data: List[ChartPoint]


class AdminDashboardResponse(CamelModel):
    role: str
    total_users: int
    total_properties: int
    total_reviews: int
    recent_users: List[UserResponse]
    recent_properties: List[PropertyResponse]
    recent_reviews: List[ReviewResponse]
    property_status_chart: List[ChartPoint]
