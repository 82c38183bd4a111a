from datetime import datetime, timedelta
from typing import Optional

from flask import current_app

from libraryhub.models.borrowing import STATUS_BORROWED
from libraryhub.remote.errors import DataServiceError
from libraryhub.repositories.borrowing_repo import BorrowingRepo
from libraryhub.repositories.cart_repo import CartRepo
from libraryhub.utils.dates import to_iso, utcnow


class CartService:
    @staticmethod
    def list_items(user_id: str):
        try:
            return CartRepo.list_by_user(user_id)
        except DataServiceError as e:
            current_app.logger.warning(f"[CartService] cart fetch failed: {e}")
            return []

    @staticmethod
    def remove_item(user_id: str, item_id: str):
        CartRepo.delete(item_id, user_id)

    @staticmethod
    def borrow_all(user_id: str, now: Optional[datetime] = None, loan_days: Optional[int] = None):
        """Turn every cart item into a borrowing, then empty the cart.

        Both writes succeed or neither sticks: if clearing the cart fails the
        borrowings just created are deleted again and the error propagates.
        An empty cart is a no-op and returns ``[]``.
        """
        items = CartRepo.list_by_user(user_id)
        if not items:
            return []

        now = now or utcnow()
        if loan_days is None:
            loan_days = current_app.config.get("LOAN_PERIOD_DAYS", 14)
        due_date = now + timedelta(days=loan_days)

        rows = [
            {
                "user_id": user_id,
                "book_id": item.book_id,
                "borrowed_at": to_iso(now),
                "due_date": to_iso(due_date),
                "status": STATUS_BORROWED,
            }
            for item in items
        ]

        # 1) borrowings (failure here leaves the cart untouched)
        created = BorrowingRepo.create_many(rows)

        # 2) cart clear, compensated on failure
        try:
            CartRepo.delete_all_for_user(user_id)
        except DataServiceError as e:
            current_app.logger.error(
                f"[CartService] cart clear failed after borrowing, rolling back {len(created)} borrowing(s): {e}"
            )
            try:
                BorrowingRepo.delete_many([b.id for b in created])
            except DataServiceError as rollback_error:
                current_app.logger.error(f"[CartService] rollback failed for user={user_id}: {rollback_error}")
            raise

        current_app.logger.info(f"[CartService] user={user_id} borrowed {len(created)} book(s), due {due_date.date()}")
        return created
