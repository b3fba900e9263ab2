"""
SQLAlchemy Implementation of Call Repository.
"""

from typing import Dict, Iterable, List

from sqlalchemy import func

from callboard.domain.models.call_record import CallRecord
from callboard.domain.repositories.call_repository import CallRepository
from callboard.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCallRepository(SQLAlchemyRepository[CallRecord], CallRepository):
    """Call repository implementation using SQLAlchemy."""

    def list_newest_first(self) -> List[CallRecord]:
        return (
            self.db.query(CallRecord)
            .order_by(CallRecord.timestamp.desc(), CallRecord.id.desc())
            .all()
        )

    def count_all(self) -> int:
        return self.db.query(func.count(CallRecord.id)).scalar() or 0

    def count_by_status(self, statuses: Iterable[str]) -> Dict[str, int]:
        wanted = list(statuses)
        rows = (
            self.db.query(CallRecord.status, func.count(CallRecord.id))
            .filter(CallRecord.status.in_(wanted))
            .group_by(CallRecord.status)
            .all()
        )
        counts = {status: 0 for status in wanted}
        counts.update({status: count for status, count in rows})
        return counts
