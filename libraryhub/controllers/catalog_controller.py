from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from libraryhub.extensions import session_store
from libraryhub.remote.errors import DataServiceError
from libraryhub.services.catalog_service import (
    ALL_CATEGORIES,
    CatalogService,
    filter_books,
    list_categories,
)

catalog_bp = Blueprint("catalog", __name__)


def _filter_args(source):
    query = source.get("q") or ""
    category = source.get("category") or ALL_CATEGORIES
    return query, category


def _back_to_catalog(query, category):
    args = {}
    if query:
        args["q"] = query
    if category != ALL_CATEGORIES:
        args["category"] = category
    return redirect(url_for("catalog.books_page", **args))


@catalog_bp.get("/books")
def books_page():
    query, category = _filter_args(request.args)

    books = CatalogService.list_books()
    session = session_store.current()
    cart_ids = CatalogService.cart_book_ids(session.user_id) if session else set()

    cards = CatalogService.build_cards(filter_books(books, query, category), cart_ids)
    return render_template(
        "books.html",
        cards=cards,
        categories=list_categories(books),
        query=query,
        category=category,
        can_add=True,
    )


@catalog_bp.post("/books/<string:book_id>/cart")
def add_to_cart(book_id: str):
    query, category = _filter_args(request.form)

    session = session_store.current()
    if session is None:
        # browse-only: no remote call for anonymous viewers
        flash("Please log in. You need to be logged in to add books to cart.", "danger")
        return _back_to_catalog(query, category)

    try:
        CatalogService.add_to_cart(session.user_id, book_id)
        flash("Added to cart. Book has been added to your cart.", "success")
    except ValueError as e:
        flash(str(e), "warning")
    except DataServiceError as e:
        current_app.logger.warning(f"[catalog] add to cart failed: {e}")
        flash("Failed to add book to cart.", "danger")

    return _back_to_catalog(query, category)
