"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from callboard.domain.models.call_record import CallRecord
from callboard.domain.repositories.call_repository import CallRepository
from callboard.infrastructure.database import get_db
from callboard.infrastructure.repositories.call_repository import SQLAlchemyCallRepository


def get_call_repository(db: Session = Depends(get_db)) -> CallRepository:
    """Get call repository instance."""
    return SQLAlchemyCallRepository(db, CallRecord)
