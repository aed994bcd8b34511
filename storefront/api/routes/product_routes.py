# storefront/api/routes/product_routes.py
from flask import Blueprint

from storefront.api.utils.responses import HTTP_CREATED, get_payload, success
from storefront.services import catalog

api_products = Blueprint("api_products", __name__, url_prefix="/api/products")


@api_products.get("")
def list_products():
    return success(catalog.list_products())


@api_products.post("")
def create_product():
    product = catalog.create_product(get_payload())
    return success(product, HTTP_CREATED, "Product created successfully")


@api_products.get("/<int:product_id>")
def get_product(product_id: int):
    return success(catalog.get_product(product_id))


@api_products.get("/slug/<string:slug>")
def get_product_by_slug(slug: str):
    return success(catalog.get_product_by_slug(slug.strip()))


@api_products.put("/<int:product_id>")
def update_product(product_id: int):
    product = catalog.update_product(product_id, get_payload())
    return success(product, message="Product updated successfully")


@api_products.delete("/<int:product_id>")
def delete_product(product_id: int):
    catalog.delete_product(product_id)
    return success(None, message="Product deleted successfully")
