"""Community domain model."""

from dataclasses import dataclass

from domain.model.errors import ValidationError

NAME_MAX_LENGTH = 50


@dataclass
class Community:
    """A community users can join. Name is unique across all communities."""
    name: str
    id: str | None = None
    logo: str | None = None

    @staticmethod
    def create(name: str, logo: str | None = None) -> 'Community':
        """Build a new, unsaved community. ID is assigned by the repository on save."""
        validate_name(name)
        return Community(name=name.strip(), logo=logo)


def validate_name(name: str) -> None:
    """Raise ValidationError if name is empty or too long."""
    if not name or not name.strip():
        raise ValidationError("Community name is required")
    if len(name.strip()) > NAME_MAX_LENGTH:
        raise ValidationError(f"Community name must be at most {NAME_MAX_LENGTH} characters")
