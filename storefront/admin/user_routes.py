# storefront/admin/user_routes.py
from flask import abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from storefront.errors import NotFoundError, ValidationError
from storefront.services import catalog
from . import admin_bp

USER_SORTS = {
    "date_desc": ("created_at", True),
    "date_asc": ("created_at", False),
    "name_asc": ("name", False),
    "name_desc": ("name", True),
    "email_asc": ("email", False),
}


def _user_or_404(user_id: int) -> dict:
    try:
        return catalog.get_user(user_id)
    except NotFoundError:
        abort(404)


@admin_bp.route("/users", endpoint="users")
@login_required
def user_list():
    q = (request.args.get("q") or "").strip()
    sort = request.args.get("sort") or "date_desc"
    users = catalog.search_rows(catalog.list_users(), q, ("name", "email"))
    users = catalog.sort_rows(users, sort, USER_SORTS, "date_desc")
    return render_template("admin/users/list.html", users=users, q=q, selected_sort=sort)


@admin_bp.route("/users/add", methods=["GET", "POST"], endpoint="add_user")
@login_required
def user_add():
    values = request.form.to_dict()
    if request.method == "POST":
        try:
            user = catalog.create_user(values)
        except ValidationError as e:
            flash(e.message, "danger")
            return render_template("admin/users/form.html", user=None, values=values), 400
        flash(f"User {user['name']} created.", "success")
        return redirect(url_for("admin.users"))
    return render_template("admin/users/form.html", user=None, values=values)


@admin_bp.route("/users/<int:user_id>/edit", methods=["GET", "POST"], endpoint="edit_user")
@login_required
def user_edit(user_id: int):
    user = _user_or_404(user_id)
    if request.method == "POST":
        values = request.form.to_dict()
        try:
            catalog.update_user(user_id, values)
        except ValidationError as e:
            flash(e.message, "danger")
            return render_template("admin/users/form.html", user=user, values=values), 400
        flash("User updated.", "success")
        return redirect(url_for("admin.users"))
    return render_template("admin/users/form.html", user=user, values=user)


@admin_bp.route("/users/<int:user_id>/delete", methods=["GET", "POST"], endpoint="delete_user")
@login_required
def user_delete(user_id: int):
    user = _user_or_404(user_id)
    if request.method == "GET":
        return render_template(
            "admin/confirm_delete.html",
            kind="user",
            label=f"{user['name']} <{user['email']}>",
            warning="All orders of this user are deleted with it.",
            cancel_url=url_for("admin.users"),
        )
    catalog.delete_user(user_id)
    flash("User deleted.", "success")
    return redirect(url_for("admin.users"))
