"""Errors raised by the services and reported by the API.

Each error carries the translation key of its client message, a stable
machine-readable code and the HTTP status the API reports it with.
"""


class ApiError(Exception):
    """Base class for errors reported to the client with a localized message."""

    code = "BAD_REQUEST"
    message_key = "badRequest"
    status_code = 400


class UnauthorizedError(ApiError):
    code = "UNAUTHORIZED"
    message_key = "unauthorized"
    status_code = 401


class ForbiddenError(ApiError):
    code = "FORBIDDEN"
    message_key = "forbidden"
    status_code = 403


class OrderError(ApiError):
    """Base class for order placement and lookup failures."""

    code = "ORDER_ERROR"


class InvalidDateRangeError(OrderError):
    """Raised when the rental start is not strictly before the end."""

    code = "INVALID_DATE_RANGE"
    message_key = "invalidDates"


class AddressRequiredError(OrderError):
    """Raised when delivery is requested without an address the user owns."""

    code = "ADDRESS_REQUIRED"
    message_key = "addressRequired"


class ProductNotFoundError(OrderError):
    """Raised when a requested product is missing or inactive."""

    code = "PRODUCT_NOT_FOUND"
    message_key = "productNotFound"


class MinimumRentalDurationError(OrderError):
    """Raised when the rental period is shorter than one day."""

    code = "MIN_RENTAL_DURATION"
    message_key = "minRentalDays"


class InsufficientStockError(OrderError):
    """Raised when stock is insufficient for the requested period."""

    code = "INSUFFICIENT_STOCK"
    message_key = "insufficientStock"

    def __init__(self, product_id, requested: int, available: int):
        super().__init__(
            f"Product {product_id}: requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class OrderNotFoundError(OrderError):
    code = "ORDER_NOT_FOUND"
    message_key = "orderNotFound"
    status_code = 404


class OrderPersistenceError(OrderError):
    """Raised when the order transaction fails in the storage layer."""

    code = "INTERNAL_ERROR"
    message_key = "internalServerError"
    status_code = 500


class ProductLookupError(ProductNotFoundError):
    """Raised when a single product looked up by id is missing or inactive."""

    status_code = 404
