class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRange(ValidationError):
    """Raised when a leave ends before it starts."""


class InsufficientNotice(ValidationError):
    """Raised when a leave has no days left after the notice adjustment."""


class InvalidExpenseAmount(ValidationError):
    """Raised when a billing amount is missing, non-numeric or out of range."""


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness rule."""


class DuplicateBillingCycle(ConflictError):
    """Raised when a bill already exists for the month."""


class DuplicatePayment(ConflictError):
    """Raised when a billing cycle has already been paid."""


class NotFoundError(DomainError):
    """Raised when a student, leave or flag lookup misses."""


class AuthenticationError(DomainError):
    """Raised when no authenticated session is present."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
