from sqlalchemy import Column, String, Float, Boolean, DateTime, Text, Index
from sqlalchemy.sql import func
from app.database.connection import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    location = Column(String, nullable=False, index=True)  # Indexed for search
    image = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    min_price = Column(Float, nullable=False)
    max_price = Column(Float, nullable=False)
    agent_name = Column(String, nullable=True)
    agent_email = Column(String, nullable=False, index=True)
    agent_image = Column(String, nullable=True)
    verification_status = Column(String, nullable=False, default="pending", index=True)  # 'pending', 'verified', 'rejected'
    advertised = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_property_agent_status', 'agent_email', 'verification_status'),
    )
