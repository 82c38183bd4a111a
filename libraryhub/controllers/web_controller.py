from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from libraryhub.extensions import session_store
from libraryhub.services.auth_service import AuthService
from libraryhub.services.catalog_service import CatalogService

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
def index():
    limit = current_app.config.get("FEATURED_BOOKS_LIMIT", 4)
    featured = CatalogService.featured_books(limit)
    return render_template("index.html", featured_books=featured)


@web_bp.route("/auth", methods=["GET", "POST"])
def auth_page():
    if request.method == "GET":
        if session_store.current() is not None:
            return redirect(url_for("catalog.books_page"))
        return render_template("auth.html")

    email = (request.form.get("email") or "").strip()
    password = (request.form.get("password") or "").strip()

    if not email or not password:
        flash("Email and password are required.", "danger")
        return redirect(url_for("web.auth_page"))

    try:
        AuthService.login(email, password)
    except ValueError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.auth_page"))

    flash("Welcome back!", "success")
    return redirect(url_for("catalog.books_page"))


@web_bp.route("/auth/register", methods=["GET", "POST"])
def register_page():
    if session_store.current() is not None:
        return redirect(url_for("catalog.books_page"))

    if request.method == "GET":
        return render_template("register.html")

    full_name = (request.form.get("full_name") or "").strip()
    email = (request.form.get("email") or "").strip()
    password = (request.form.get("password") or "").strip()

    if not email or not password:
        flash("Email and password are required.", "danger")
        return redirect(url_for("web.register_page"))

    try:
        session = AuthService.register(email=email, password=password, full_name=full_name)
    except ValueError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.register_page"))

    if session is None:
        flash("Account created. Check your email to confirm it, then log in.", "success")
        return redirect(url_for("web.auth_page"))

    flash("Account created. Welcome!", "success")
    return redirect(url_for("catalog.books_page"))


@web_bp.get("/logout")
def logout():
    AuthService.logout()
    flash("Logged out successfully", "success")
    return redirect(url_for("web.auth_page"))
