# storefront/api/routes/user_routes.py
from flask import Blueprint

from storefront.api.utils.responses import HTTP_CREATED, get_payload, success
from storefront.services import catalog

api_users = Blueprint("api_users", __name__, url_prefix="/api/users")


@api_users.get("")
def list_users():
    return success(catalog.list_users())


@api_users.post("")
def create_user():
    user = catalog.create_user(get_payload())
    return success(user, HTTP_CREATED, "User created successfully")


@api_users.get("/<int:user_id>")
def get_user(user_id: int):
    return success(catalog.get_user(user_id))


@api_users.put("/<int:user_id>")
def update_user(user_id: int):
    user = catalog.update_user(user_id, get_payload())
    return success(user, message="User updated successfully")


@api_users.delete("/<int:user_id>")
def delete_user(user_id: int):
    catalog.delete_user(user_id)
    return success(None, message="User deleted successfully")
