class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced employee/record/request does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on uniqueness violations (duplicate email, duplicate month)."""

    status_code = 409


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed from the current state."""

    status_code = 409

    def __init__(self, kind: str, current: str, target: str):
        super().__init__(f"Cannot move {kind} from '{current}' to '{target}'")
        self.kind = kind
        self.current = current
        self.target = target
