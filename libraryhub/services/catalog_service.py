from dataclasses import dataclass
from typing import Iterable, List

from flask import current_app

from libraryhub.models.book import Book
from libraryhub.remote.errors import DataServiceError
from libraryhub.repositories.book_repo import BookRepo
from libraryhub.repositories.cart_repo import CartRepo

ALL_CATEGORIES = "all"


def filter_books(books: Iterable[Book], query: str = "", category: str = ALL_CATEGORIES) -> List[Book]:
    """Title/author substring match (case-insensitive) AND exact category match.

    An empty query and the ``"all"`` category both let every book through.
    """
    filtered = list(books)

    if query:
        needle = query.lower()
        filtered = [
            b for b in filtered
            if needle in (b.title or "").lower() or needle in (b.author or "").lower()
        ]

    if category and category != ALL_CATEGORIES:
        filtered = [b for b in filtered if b.category == category]

    return filtered


def list_categories(books: Iterable[Book]) -> List[str]:
    seen = []
    for b in books:
        if b.category and b.category not in seen:
            seen.append(b.category)
    return seen


@dataclass
class BookCard:
    book: Book
    in_cart: bool = False
    # always False when rendered on the server; a submit is a full page load
    is_loading: bool = False

    @property
    def add_disabled(self) -> bool:
        return not self.book.is_available or self.in_cart or self.is_loading


class CatalogService:
    @staticmethod
    def list_books():
        try:
            return BookRepo.list_all()
        except DataServiceError as e:
            current_app.logger.warning(f"[CatalogService] books fetch failed: {e}")
            return []

    @staticmethod
    def featured_books(limit: int):
        try:
            return BookRepo.list_featured(limit)
        except DataServiceError as e:
            current_app.logger.warning(f"[CatalogService] featured fetch failed: {e}")
            return []

    @staticmethod
    def cart_book_ids(user_id: str) -> set:
        try:
            return set(CartRepo.list_book_ids(user_id))
        except DataServiceError as e:
            current_app.logger.warning(f"[CatalogService] cart ids fetch failed: {e}")
            return set()

    @staticmethod
    def build_cards(books: Iterable[Book], cart_ids: set) -> List[BookCard]:
        return [BookCard(book=b, in_cart=b.id in cart_ids) for b in books]

    @staticmethod
    def add_to_cart(user_id: str, book_id: str):
        # same rules as the disabled "Add to Cart" button
        book = BookRepo.get(book_id)
        if book is None or not book.is_available:
            raise ValueError("This book is currently unavailable.")

        if book_id in CatalogService.cart_book_ids(user_id):
            raise ValueError("This book is already in your cart.")

        item = CartRepo.create(user_id, book_id)
        current_app.logger.info(f"[CatalogService] user={user_id} added book={book_id} to cart")
        return item
