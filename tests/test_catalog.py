import pytest

from libraryhub.models.book import Book
from libraryhub.services.catalog_service import ALL_CATEGORIES, BookCard, filter_books, list_categories
from tests.fakes import BOOKS


@pytest.fixture
def books():
    return [Book.from_row(r) for r in BOOKS]


def _ids(books):
    return [b.id for b in books]


# -----------------------------
# Filtering
# -----------------------------
def test_empty_query_and_all_category_keep_every_book(books):
    assert filter_books(books, "", ALL_CATEGORIES) == books


@pytest.mark.parametrize("query, expected", [
    ("dune", ["b1"]),
    ("AUSTEN", ["b2", "b5"]),
    ("an", ["b1", "b2", "b3", "b5"]),  # title or author
    ("tolkien", ["b4"]),
    ("zzz", []),
])
def test_query_matches_title_or_author_case_insensitively(books, query, expected):
    assert _ids(filter_books(books, query)) == expected


@pytest.mark.parametrize("query", ["e", "Jane", "HOBBIT", "r.r.", " "])
def test_query_result_is_exactly_the_matching_subset(books, query):
    q = query.lower()
    expected = [b for b in books if q in b.title.lower() or q in b.author.lower()]
    assert filter_books(books, query) == expected


def test_category_is_exact_match(books):
    assert _ids(filter_books(books, category="Classics")) == ["b2", "b5"]
    assert filter_books(books, category="classics") == []
    assert filter_books(books, category="Horror") == []


def test_query_and_category_are_combined(books):
    assert _ids(filter_books(books, "austen", "Classics")) == ["b2", "b5"]
    assert _ids(filter_books(books, "an", "Science Fiction")) == ["b1", "b3"]
    assert filter_books(books, "gibson", "Classics") == []


def test_categories_are_distinct_non_null_in_first_seen_order(books):
    assert list_categories(books) == ["Science Fiction", "Classics"]


# -----------------------------
# Add to cart button state
# -----------------------------
def test_add_button_disabled_rules(books):
    dune, emma = books[0], books[1]
    assert BookCard(dune).add_disabled is False
    assert BookCard(emma).add_disabled is True  # no copies left
    assert BookCard(dune, in_cart=True).add_disabled is True
    assert BookCard(dune, is_loading=True).add_disabled is True


# -----------------------------
# Views
# -----------------------------
def test_catalog_lists_books_for_anonymous_viewer(client, fake_client):
    resp = client.get("/books")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    for row in BOOKS:
        assert row["title"] in body
    # browse-only: no cart lookup without a session
    assert fake_client.remote_calls("cart_items") == []


def test_catalog_applies_search_and_category(client):
    body = client.get("/books?q=austen&category=Classics").get_data(as_text=True)
    assert "Pride and Prejudice" in body
    assert "Emma" in body
    assert "Dune" not in body


def test_anonymous_add_to_cart_makes_no_remote_call(client, fake_client):
    resp = client.post("/books/b1/cart", data={"q": "", "category": "all"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/books")
    assert fake_client.remote_calls("cart_items") == []

    body = client.get("/books").get_data(as_text=True)
    assert "Please log in" in body


def test_add_to_cart_inserts_one_row(client, fake_client, login):
    login()
    resp = client.post("/books/b1/cart", data={"q": "dune", "category": "all"})
    assert resp.status_code == 302
    assert "q=dune" in resp.headers["Location"]

    rows = fake_client.rows("cart_items")
    assert len(rows) == 1
    assert rows[0]["user_id"] == "user-1"
    assert rows[0]["book_id"] == "b1"


def test_book_already_in_cart_is_shown_as_in_cart_and_not_inserted_again(client, fake_client, login):
    login()
    fake_client.seed("cart_items", [{"id": "c1", "user_id": "user-1", "book_id": "b1"}])

    body = client.get("/books?q=dune").get_data(as_text=True)
    assert "In Cart" in body
    assert "disabled" in body

    client.post("/books/b1/cart")
    assert ("cart_items", "insert") not in fake_client.calls
    assert len(fake_client.rows("cart_items")) == 1


def test_unavailable_book_is_not_added(client, fake_client, login):
    login()
    resp = client.post("/books/b2/cart", follow_redirects=True)

    assert "This book is currently unavailable." in resp.get_data(as_text=True)
    assert ("cart_items", "insert") not in fake_client.calls
    assert fake_client.rows("cart_items") == []


def test_unknown_book_is_not_added(client, fake_client, login):
    login()
    client.post("/books/nope/cart")
    assert ("cart_items", "insert") not in fake_client.calls


def test_add_to_cart_failure_is_reported(client, fake_client, login):
    login()
    fake_client.fail("cart_items", "insert")

    resp = client.post("/books/b1/cart", follow_redirects=True)
    assert "Failed to add book to cart." in resp.get_data(as_text=True)
    assert fake_client.rows("cart_items") == []


def test_catalog_read_failure_renders_empty_page(client, fake_client):
    fake_client.fail("books", "select")
    resp = client.get("/books")
    assert resp.status_code == 200
    assert "No books found" in resp.get_data(as_text=True)


def test_landing_page_shows_at_most_four_featured_books(client):
    body = client.get("/").get_data(as_text=True)
    assert body.count('class="book-card"') == 4
    # featured cards have no cart action
    assert "Add to Cart" not in body
