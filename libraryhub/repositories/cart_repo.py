from libraryhub.extensions import get_data_client
from libraryhub.models.cart_item import CartItem

class CartRepo:
    @staticmethod
    def list_by_user(user_id: str):
        res = (
            get_data_client()
            .table("cart_items")
            .select("id, user_id, book_id, books(*)")
            .eq("user_id", user_id)
            .execute()
        )
        return [CartItem.from_row(r) for r in res.data or []]

    @staticmethod
    def list_book_ids(user_id: str):
        res = get_data_client().table("cart_items").select("book_id").eq("user_id", user_id).execute()
        return [str(r["book_id"]) for r in res.data or []]

    @staticmethod
    def count_by_user(user_id: str) -> int:
        res = (
            get_data_client()
            .table("cart_items")
            .select("*", count="exact", head=True)
            .eq("user_id", user_id)
            .execute()
        )
        return res.count or 0

    @staticmethod
    def create(user_id: str, book_id: str):
        res = get_data_client().table("cart_items").insert({"user_id": user_id, "book_id": book_id}).execute()
        rows = res.data or []
        return CartItem.from_row(rows[0]) if rows else None

    @staticmethod
    def delete(item_id: str, user_id: str):
        res = get_data_client().table("cart_items").delete().eq("id", item_id).eq("user_id", user_id).execute()
        return len(res.data or [])

    @staticmethod
    def delete_all_for_user(user_id: str):
        res = get_data_client().table("cart_items").delete().eq("user_id", user_id).execute()
        return len(res.data or [])
