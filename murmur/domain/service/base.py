"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment engine's business rules and coordinate
    repositories; they own no state of their own.
    """

    pass
