# Database models
from app.models.user import User
from app.models.property import Property
from app.models.offer import Offer
from app.models.wishlist import Wishlist
from app.models.review import Review

__all__ = [
    "User",
    "Property",
    "Offer",
    "Wishlist",
    "Review",
]
