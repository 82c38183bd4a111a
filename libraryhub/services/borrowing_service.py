from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from flask import current_app

from libraryhub.models.borrowing import STATUS_BORROWED, STATUS_RETURNED, Borrowing
from libraryhub.remote.errors import DataServiceError
from libraryhub.repositories.borrowing_repo import BorrowingRepo
from libraryhub.utils.dates import utcnow

BADGE_BORROWED = "borrowed"
BADGE_OVERDUE = "overdue"
BADGE_RETURNED = "returned"


@dataclass
class BorrowingStats:
    total: int = 0
    borrowed: int = 0
    overdue: int = 0  # subset of borrowed
    returned: int = 0


def compute_stats(borrowings: Iterable[Borrowing], now: Optional[datetime] = None) -> BorrowingStats:
    now = now or utcnow()
    rows = list(borrowings)
    return BorrowingStats(
        total=len(rows),
        borrowed=sum(1 for b in rows if b.status == STATUS_BORROWED),
        overdue=sum(1 for b in rows if b.is_overdue(now)),
        returned=sum(1 for b in rows if b.status == STATUS_RETURNED),
    )


def status_badge(borrowing: Borrowing, now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    if borrowing.status == STATUS_RETURNED:
        return BADGE_RETURNED
    if now > borrowing.due_date:
        return BADGE_OVERDUE
    return BADGE_BORROWED


class BorrowingService:
    @staticmethod
    def list_borrowings(user_id: str):
        try:
            return BorrowingRepo.list_by_user(user_id)
        except DataServiceError as e:
            current_app.logger.warning(f"[BorrowingService] borrowings fetch failed: {e}")
            return []
        except ValueError as e:
            current_app.logger.error(f"[BorrowingService] unreadable borrowing row for user={user_id}: {e}")
            return []

    @staticmethod
    def return_borrowing(user_id: str, borrowing_id: str, now: Optional[datetime] = None):
        now = now or utcnow()
        updated = BorrowingRepo.mark_returned(borrowing_id, user_id, now)
        if not updated:
            raise ValueError("Borrowing not found or already returned.")

        current_app.logger.info(f"[BorrowingService] user={user_id} returned borrowing={borrowing_id}")
        return updated[0]
