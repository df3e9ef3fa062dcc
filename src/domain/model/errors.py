"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class UserNotFoundError(NotFoundError):
    """No user stored under the requested ID."""


class CommunityNotFoundError(NotFoundError):
    """No community stored under the requested ID."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class InvalidIdentifierError(ValidationError):
    """Identifier is not a valid MongoDB ObjectId."""


class UninitializedAggregateError(DomainError):
    """Accessor used before an aggregate was constructed or loaded."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} is not initialized.")


class MembershipError(DomainError):
    """Community membership transition is not allowed from the current state."""


class AlreadyInCommunityError(MembershipError):
    """User already belongs to a community."""

    def __init__(self, community_id: str | None = None):
        self.community_id = community_id
        super().__init__("User already in community")


class NotInCommunityError(MembershipError):
    """User does not belong to any community."""

    def __init__(self):
        super().__init__("User not in community")


class StorageError(DomainError):
    """Unclassified failure in the storage backend."""
