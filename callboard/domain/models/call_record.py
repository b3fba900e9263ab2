"""Call records posted by the call-logging webhook."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from callboard.infrastructure.database import Base

STATUS_COMPLETED = "completed"
STATUS_PENDING = "pending"
STATUS_FAILED = "failed"


class CallRecord(Base):
    __tablename__ = "calls"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(200), nullable=False)
    company = Column(String(200), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False, index=True)  # completed, pending, failed, or free text
    notes = Column(Text, nullable=True)
    recording_url = Column(String(1000), nullable=True)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    def __repr__(self):
        return f"<CallRecord {self.name} - {self.status}>"
