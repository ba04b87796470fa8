"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Handlers never translate them; they propagate from the point of violation.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# --- Value errors -------------------------------------------------------------


class InvalidAmount(ValidationError):
    """A monetary amount is negative or cannot be parsed."""


class CurrencyMismatch(ValidationError):
    """Two monetary amounts in different currencies were combined."""


class InvalidEmail(ValidationError):
    """A customer email does not look like ``local@domain.tld``."""


class EmptyAddress(ValidationError):
    """A customer address was blank."""


# --- Stock and order errors ---------------------------------------------------


class NegativeStock(ValidationError):
    """A stock level would drop below zero."""


class InvalidQuantity(ValidationError):
    """An item quantity is not a positive integer."""


class InsufficientStock(ValidationError):
    """A product does not have enough stock for the requested quantity."""


class IllegalTransition(ValidationError):
    """An order status change is not allowed from the current status."""


# --- Lookups ------------------------------------------------------------------


class ProductNotFound(EntityNotFoundError):
    """No product exists with the requested id."""


class OrderNotFound(EntityNotFoundError):
    """No order exists with the requested id."""


# --- Persistence --------------------------------------------------------------


class ConcurrencyConflict(DomainException):
    """A stored aggregate changed since it was loaded (version mismatch)."""
