"""Per-user Vapi credentials and defaults — one row per user, created on first save."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from callboard.infrastructure.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    vapi_private_key = Column(String(255), nullable=True)
    assistant_id = Column(String(255), nullable=True)
    phone_number_id = Column(String(255), nullable=True)
    default_customer_number = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<UserSettings user={self.user_id}>"
