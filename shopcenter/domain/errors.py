# shopcenter/domain/errors.py


class NotFoundError(LookupError):
    pass


class DomainError(ValueError):
    """Business rule violated by an otherwise well-formed request."""


class EmptyCartError(DomainError):
    pass


class ProductUnavailableError(DomainError):
    pass


class InsufficientStockError(DomainError):
    pass


class InvalidStatusTransition(DomainError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change order status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested
