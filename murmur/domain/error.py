"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class CapacityExceededError(ValidationError):
    """Raised when a parent has no free sibling positions left."""

    def __init__(self, position: int, limit: int):
        self.position = position
        self.limit = limit
        super().__init__(
            f"Position {position} exceeds the maximum of {limit} children per parent"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class AuthenticationRequiredError(DomainError):
    """Raised when an operation needs a caller identity and none was given."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class RateLimitedError(DomainError):
    """Raised when the caller exhausted the rate limit for an action."""

    def __init__(self, action: str, retry_after: int):
        self.action = action
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Please wait {retry_after} seconds before trying again."
        )


class ConcurrencyConflictError(DomainError):
    """Raised when an optimistic update keeps losing to concurrent writers."""

    def __init__(self, resource: str, identifier: str, attempts: int):
        super().__init__(
            f"Gave up updating {resource} {identifier} after {attempts} conflicting attempts"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
