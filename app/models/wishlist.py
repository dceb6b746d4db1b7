from sqlalchemy import Column, String, Float, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.database.connection import Base


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(String, primary_key=True)
    user_email = Column(String, nullable=False, index=True)
    property_id = Column(String, nullable=False, index=True)
    # Snapshot of the property at the time it was saved
    property_title = Column(String, nullable=True)
    property_location = Column(String, nullable=True)
    property_image = Column(String, nullable=True)
    agent_name = Column(String, nullable=True)
    agent_email = Column(String, nullable=True)
    agent_image = Column(String, nullable=True)
    min_price = Column(Float, nullable=True)
    max_price = Column(Float, nullable=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    __table_args__ = (
        UniqueConstraint('user_email', 'property_id', name='uq_wishlist_user_property'),
    )
