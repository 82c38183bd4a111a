from dataclasses import dataclass
from typing import Optional

from libraryhub.models.book import Book


@dataclass
class CartItem:
    id: str
    user_id: Optional[str]
    book_id: str
    book: Optional[Book] = None

    @classmethod
    def from_row(cls, row: dict) -> "CartItem":
        # joined select embeds the book under "books"
        book_row = row.get("books")
        return cls(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            book_id=str(row["book_id"]),
            book=Book.from_row(book_row) if book_row else None,
        )
