"""
Call Repository Interface.
Data access for webhook-logged call records.
"""

from typing import Dict, Iterable, List

from callboard.domain.models.call_record import CallRecord
from callboard.domain.repositories.base import BaseRepository


class CallRepository(BaseRepository[CallRecord]):
    """Interface for CallRecord-specific operations."""

    def list_newest_first(self) -> List[CallRecord]:
        """All call records, most recent timestamp first."""
        ...

    def count_all(self) -> int:
        """Total number of call records."""
        ...

    def count_by_status(self, statuses: Iterable[str]) -> Dict[str, int]:
        """Number of records per status, for each of the given statuses (0 when absent)."""
        ...
