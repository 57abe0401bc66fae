# storefront/domain/errors.py


class ValidationError(ValueError):
    """Malformed or disallowed input (HTTP 400)."""


class EmptyCartError(ValidationError):
    pass


class NotFoundError(LookupError):
    """Entity does not exist or is not visible to the caller (HTTP 404)."""


class ConflictError(RuntimeError):
    """State conflict: duplicate unique value, stock exhausted (HTTP 409)."""


class InsufficientStockError(ConflictError):
    def __init__(self, product_id: int, requested: int, variant_id: int | None = None):
        self.product_id = product_id
        self.variant_id = variant_id
        self.requested = requested
        target = f"variant {variant_id} of product {product_id}" if variant_id else f"product {product_id}"
        super().__init__(f"Insufficient stock for {target}")


class AuthenticationError(Exception):
    """Missing/invalid session or bad credentials (HTTP 401)."""
