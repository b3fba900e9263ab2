"""Call log service — webhook call records and dashboard statistics."""

from typing import List

from callboard.domain.models.call_record import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PENDING,
    CallRecord,
)
from callboard.domain.repositories.call_repository import CallRepository
from callboard.domain.schemas.call import CallCreate, CallStats


def log_call(repo: CallRepository, call: CallCreate) -> CallRecord:
    return repo.create(call)


def list_calls(repo: CallRepository) -> List[CallRecord]:
    return repo.list_newest_first()


def success_rate(completed: int, total: int) -> int:
    """Percentage of completed calls, rounded half up; 0 when there are no calls."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def get_call_stats(repo: CallRepository) -> CallStats:
    total = repo.count_all()
    counts = repo.count_by_status((STATUS_COMPLETED, STATUS_PENDING, STATUS_FAILED))
    return CallStats(
        total_calls=total,
        completed_calls=counts[STATUS_COMPLETED],
        pending_calls=counts[STATUS_PENDING],
        failed_calls=counts[STATUS_FAILED],
        success_rate=success_rate(counts[STATUS_COMPLETED], total),
    )
