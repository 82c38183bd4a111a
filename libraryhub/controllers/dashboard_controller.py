from flask import Blueprint, current_app, render_template, redirect, url_for, flash

from libraryhub.remote.errors import DataServiceError
from libraryhub.services.borrowing_service import BorrowingService, compute_stats, status_badge
from libraryhub.utils.dates import utcnow
from libraryhub.utils.decorators import current_user_id, login_required

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.get("")
@login_required
def dashboard_page():
    borrowings = BorrowingService.list_borrowings(current_user_id())

    # one clock reading for counters and badges of this render
    now = utcnow()
    rows = [{"borrowing": b, "badge": status_badge(b, now)} for b in borrowings]
    return render_template("dashboard.html", rows=rows, stats=compute_stats(borrowings, now))


@dashboard_bp.post("/return/<string:borrowing_id>")
@login_required
def return_book(borrowing_id: str):
    try:
        BorrowingService.return_borrowing(current_user_id(), borrowing_id)
        flash("Book returned. Thank you for returning the book!", "success")
    except ValueError as e:
        flash(str(e), "warning")
    except DataServiceError as e:
        current_app.logger.warning(f"[dashboard] return failed: {e}")
        flash("Failed to return book.", "danger")
    return redirect(url_for("dashboard.dashboard_page"))
