from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from libraryhub.utils.dates import parse_timestamp


@dataclass
class Profile:
    id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    member_since: Optional[datetime] = None

    @property
    def member_since_label(self) -> Optional[str]:
        if not self.member_since:
            return None
        return self.member_since.strftime("%B %Y")

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        return cls(
            id=str(row["id"]),
            full_name=row.get("full_name"),
            phone=row.get("phone"),
            email=row.get("email"),
            member_since=parse_timestamp(row.get("member_since")),
        )
