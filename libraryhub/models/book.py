from dataclasses import dataclass
from typing import Optional


@dataclass
class Book:
    id: str
    title: str
    author: str
    category: Optional[str] = None
    cover_image: Optional[str] = None
    available_copies: int = 0
    total_copies: int = 0

    @property
    def is_available(self) -> bool:
        return self.available_copies > 0

    @classmethod
    def from_row(cls, row: dict) -> "Book":
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            author=row.get("author") or "",
            category=row.get("category"),
            cover_image=row.get("cover_image"),
            available_copies=int(row.get("available_copies") or 0),
            total_copies=int(row.get("total_copies") or 0),
        )
