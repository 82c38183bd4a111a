from libraryhub.extensions import get_data_client
from libraryhub.models.book import Book

class BookRepo:
    @staticmethod
    def list_all():
        res = get_data_client().table("books").select("*").order("title").execute()
        return [Book.from_row(r) for r in res.data or []]

    @staticmethod
    def list_featured(limit: int):
        res = get_data_client().table("books").select("*").limit(limit).execute()
        return [Book.from_row(r) for r in res.data or []]

    @staticmethod
    def get(book_id: str):
        res = get_data_client().table("books").select("*").eq("id", book_id).limit(1).execute()
        rows = res.data or []
        return Book.from_row(rows[0]) if rows else None
