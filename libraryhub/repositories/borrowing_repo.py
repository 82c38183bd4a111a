from datetime import datetime

from libraryhub.extensions import get_data_client
from libraryhub.models.borrowing import STATUS_BORROWED, STATUS_RETURNED, Borrowing
from libraryhub.utils.dates import to_iso

class BorrowingRepo:
    @staticmethod
    def list_by_user(user_id: str):
        res = (
            get_data_client()
            .table("borrowings")
            .select("*, books(*)")
            .eq("user_id", user_id)
            .order("borrowed_at", desc=True)
            .execute()
        )
        return [Borrowing.from_row(r) for r in res.data or []]

    @staticmethod
    def create_many(rows: list):
        res = get_data_client().table("borrowings").insert(rows).execute()
        return [Borrowing.from_row(r) for r in res.data or []]

    @staticmethod
    def mark_returned(borrowing_id: str, user_id: str, returned_at: datetime):
        # only an active loan of this viewer can be returned
        res = (
            get_data_client()
            .table("borrowings")
            .update({"status": STATUS_RETURNED, "returned_at": to_iso(returned_at)})
            .eq("id", borrowing_id)
            .eq("user_id", user_id)
            .eq("status", STATUS_BORROWED)
            .execute()
        )
        return [Borrowing.from_row(r) for r in res.data or []]

    @staticmethod
    def delete_many(borrowing_ids: list):
        if not borrowing_ids:
            return 0
        res = get_data_client().table("borrowings").delete().in_("id", borrowing_ids).execute()
        return len(res.data or [])
