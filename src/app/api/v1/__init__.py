"""API v1 routers."""

from app.api.v1 import admin, orders, products

__all__ = ["admin", "orders", "products"]
