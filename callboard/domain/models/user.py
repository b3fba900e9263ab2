"""User domain model — maps to the 'users' table."""

import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from callboard.infrastructure.database import Base

AUTH_METHOD_LOCAL = "local"
AUTH_METHOD_GOOGLE = "google"


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # null for Google accounts
    google_id = Column(String(255), unique=True, nullable=True, index=True)
    email = Column(String(255), nullable=True)
    display_name = Column(String(200), nullable=True)
    avatar = Column(String(500), nullable=True)
    auth_method = Column(String(20), nullable=False, default=AUTH_METHOD_LOCAL)  # local, google
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.username}>"
