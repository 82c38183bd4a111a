from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from libraryhub.models.book import Book
from libraryhub.utils.dates import parse_timestamp, utcnow

STATUS_BORROWED = "borrowed"
STATUS_RETURNED = "returned"


@dataclass
class Borrowing:
    id: str
    user_id: Optional[str]
    book_id: str
    borrowed_at: Optional[datetime]
    due_date: datetime
    status: str = STATUS_BORROWED  # borrowed/returned
    returned_at: Optional[datetime] = None
    book: Optional[Book] = None

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_BORROWED

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        # derived, never stored: flips on wall clock alone
        now = now or utcnow()
        return self.status == STATUS_BORROWED and now > self.due_date

    @classmethod
    def from_row(cls, row: dict) -> "Borrowing":
        book_row = row.get("books")
        return cls(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            book_id=str(row["book_id"]),
            borrowed_at=parse_timestamp(row.get("borrowed_at")),
            due_date=parse_timestamp(row["due_date"]),
            status=row.get("status") or STATUS_BORROWED,
            returned_at=parse_timestamp(row.get("returned_at")),
            book=Book.from_row(book_row) if book_row else None,
        )
