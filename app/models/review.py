from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func
from app.database.connection import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String, primary_key=True)
    property_id = Column(String, nullable=False, index=True)
    property_title = Column(String, nullable=True)
    user_email = Column(String, nullable=False, index=True)
    user_name = Column(String, nullable=True)
    user_image = Column(String, nullable=True)
    agent_name = Column(String, nullable=True)
    text = Column(Text, nullable=False)
    posted_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
