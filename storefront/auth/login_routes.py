# storefront/auth/login_routes.py
from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_user, logout_user

from storefront.models.admin import Admin

auth_bp = Blueprint("auth", __name__, url_prefix="/admin")


def _safe_next(target: str | None) -> str:
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("admin.dashboard")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    """Back-office login form."""
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    if request.method == "POST":
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""

        admin = Admin.query.filter_by(username=username).first()
        if admin and admin.check_password(password):
            login_user(admin)
            flash("Signed in.", "success")
            return redirect(_safe_next(request.args.get("next")))
        flash("Invalid username or password.", "danger")
        return render_template("admin/auth/login.html", username=username), 401

    return render_template("admin/auth/login.html", username="")


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_user()
    flash("You have been signed out.", "info")
    return redirect(url_for("auth.login"))
