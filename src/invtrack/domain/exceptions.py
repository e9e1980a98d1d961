"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer and the bulk importer can catch them uniformly.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated business rule (e.g. negative stock)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class DuplicateKeyError(DomainException):
    """A unique key (name, sku, product/location pair) is already taken."""


class ReferentialIntegrityError(DomainException):
    """A delete was blocked because other rows still depend on the entity."""


class InvalidReferenceError(DomainException):
    """A stock movement points at a product or location that does not exist."""
