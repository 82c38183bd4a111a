from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from libraryhub.remote.errors import DataServiceError
from libraryhub.services.profile_service import ProfileService
from libraryhub.utils.decorators import current_user_id, login_required

profile_bp = Blueprint("profile", __name__)


@profile_bp.route("/profile", methods=["GET", "POST"])
@login_required
def profile_page():
    user_id = current_user_id()

    if request.method == "GET":
        profile = ProfileService.get_profile(user_id)
        return render_template("profile.html", profile=profile)

    full_name = (request.form.get("full_name") or "").strip()
    phone = (request.form.get("phone") or "").strip()

    try:
        ProfileService.update_profile(user_id, full_name=full_name, phone=phone)
        flash("Profile updated. Your profile has been updated successfully.", "success")
    except DataServiceError as e:
        current_app.logger.warning(f"[profile] update failed: {e}")
        flash("Failed to update profile.", "danger")

    return redirect(url_for("profile.profile_page"))
