"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The hierarchy mirrors how a caller is expected to react:

- ``ValidationError``: bad input shape or range, rejected before any
  aggregate is touched.
- ``InvariantViolation``: the request is well formed but would break a
  business invariant (negative stock, negative balance, or deleting
  something still referenced).
- ``EntityNotFoundError``: a referenced aggregate does not exist.
- ``InvalidStateTransition``: a status change not allowed from the
  current status.
- ``ConcurrencyConflict``: another unit of work committed first; safe to
  retry.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidLineItem(ValidationError):
    """A line item has a bad quantity, price, tax rate or product."""


class InvalidAmount(ValidationError):
    """A payment amount is zero, negative or not a number."""


class InvariantViolation(DomainException):
    """Applying the request would leave an aggregate in an invalid state."""


class InsufficientStock(InvariantViolation):

    def __init__(self, product_name: str, requested, available) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )


class Overpayment(InvariantViolation):
    """Payment amount exceeds the invoice's outstanding balance."""


class InvoiceAlreadyPaid(InvariantViolation):
    """The invoice balance is already zero."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):
    pass


class CustomerNotFound(EntityNotFoundError):
    pass


class SupplierNotFound(EntityNotFoundError):
    pass


class InvoiceNotFound(EntityNotFoundError):
    pass


class PONotFound(EntityNotFoundError):
    pass


class EntityInUse(InvariantViolation):
    """The aggregate is still referenced and cannot be deleted."""


class InvalidStateTransition(DomainException):
    """A status change is not allowed from the current status."""


class ConcurrencyConflict(DomainException):
    """An aggregate changed between load and commit."""
