"""User model: credentials, point balance, wallet and referral code."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from rewards.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    points = Column(Integer, nullable=False, default=0)
    wallet_address = Column(String(255), nullable=True)
    wallet_connected = Column(Boolean, nullable=False, default=False)
    referral_code = Column(String(20), unique=True, nullable=False, index=True)
    # Code presented at signup; not required to resolve to a user
    referred_by = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True
    )

    user_tasks = relationship("UserTask", back_populates="user")
    sessions = relationship("Session", back_populates="user")
