from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from app.database.connection import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    firebase_uid = Column(String, nullable=True, index=True)  # External identity provider account
    role = Column(String, nullable=True, default="user", index=True)  # 'user', 'agent', 'admin' (NULL means 'user')
    status = Column(String, nullable=False, default="active")  # 'active', 'fraud'
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
