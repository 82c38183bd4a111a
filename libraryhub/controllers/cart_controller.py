from flask import Blueprint, current_app, render_template, redirect, url_for, flash

from libraryhub.remote.errors import DataServiceError
from libraryhub.services.cart_service import CartService
from libraryhub.utils.decorators import current_user_id, login_required

cart_bp = Blueprint("cart", __name__, url_prefix="/cart")


@cart_bp.get("")
@login_required
def cart_page():
    items = CartService.list_items(current_user_id())
    return render_template(
        "cart.html",
        items=items,
        loan_days=current_app.config.get("LOAN_PERIOD_DAYS", 14),
    )


@cart_bp.post("/<string:item_id>/remove")
@login_required
def remove_item(item_id: str):
    try:
        CartService.remove_item(current_user_id(), item_id)
        flash("Removed from cart", "success")
    except DataServiceError as e:
        current_app.logger.warning(f"[cart] remove failed: {e}")
        flash("Failed to remove item from cart.", "danger")
    return redirect(url_for("cart.cart_page"))


@cart_bp.post("/borrow")
@login_required
def borrow_all():
    try:
        created = CartService.borrow_all(current_user_id())
    except DataServiceError as e:
        current_app.logger.warning(f"[cart] borrow all failed: {e}")
        flash("Failed to borrow books. Please try again.", "danger")
        return redirect(url_for("cart.cart_page"))

    if not created:
        # empty cart: nothing to do
        return redirect(url_for("cart.cart_page"))

    flash(f"Success! Successfully borrowed {len(created)} book(s).", "success")
    return redirect(url_for("dashboard.dashboard_page"))
