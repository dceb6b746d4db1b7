from sqlalchemy import Column, String, Float, DateTime, Index, text
from sqlalchemy.sql import func
from app.database.connection import Base

# Offer states. 'rejected' and 'bought' are terminal.
OFFER_PENDING = "pending"
OFFER_ACCEPTED = "accepted"
OFFER_REJECTED = "rejected"
OFFER_BOUGHT = "bought"

# States that hold the single winning slot on a property
WINNING_STATUSES = (OFFER_ACCEPTED, OFFER_BOUGHT)


class Offer(Base):
    __tablename__ = "offers"

    id = Column(String, primary_key=True)
    property_id = Column(String, nullable=False, index=True)
    property_title = Column(String, nullable=True)
    property_location = Column(String, nullable=True)
    property_image = Column(String, nullable=True)
    agent_name = Column(String, nullable=True)
    agent_email = Column(String, nullable=False, index=True)
    buyer_email = Column(String, nullable=False, index=True)
    buyer_name = Column(String, nullable=True)
    offer_amount = Column(Float, nullable=False)
    buying_date = Column(String, nullable=False)
    status = Column(String, nullable=False, default=OFFER_PENDING, index=True)
    transaction_id = Column(String, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    __table_args__ = (
        Index('idx_offers_agent_status', 'agent_email', 'status'),
        Index('idx_offers_property_status', 'property_id', 'status'),
        # At most one accepted/bought offer per property
        Index(
            'uq_offers_property_winner',
            'property_id',
            unique=True,
            postgresql_where=text("status IN ('accepted', 'bought')"),
            sqlite_where=text("status IN ('accepted', 'bought')"),
        ),
    )
