"""User domain models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from domain.model.community import Community
from domain.model.errors import AlreadyInCommunityError, NotInCommunityError, ValidationError

POINTS_MAX = 2**63 - 1
POINTS_MIN = -(2**63)


@dataclass(frozen=True)
class ExperiencePoint:
    """A single experience award. Immutable once added to a user.

    Points must fit a signed 64-bit integer (the widest BSON integer).
    Timestamps are always timezone-aware; naive values are taken as UTC.
    """
    points: int
    timestamp: datetime

    @staticmethod
    def create(points: int, timestamp: datetime | None = None) -> 'ExperiencePoint':
        # bool is a subclass of int
        if isinstance(points, bool) or not isinstance(points, int):
            raise ValidationError("Experience points must be an integer")
        if not POINTS_MIN <= points <= POINTS_MAX:
            raise ValidationError(f"Experience points must be between {POINTS_MIN} and {POINTS_MAX}")
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return ExperiencePoint(points=points, timestamp=timestamp)


@dataclass
class User:
    """Domain model representing a user.

    A user belongs to zero or one community, referenced by community_id.
    experience_points is append-only; use award() to add entries.
    """
    email: str
    password_hash: str
    id: str | None = None
    profile_picture: str | None = None
    experience_points: list[ExperiencePoint] = field(default_factory=list)
    community_id: str | None = None

    @property
    def total_experience(self) -> int:
        return sum(entry.points for entry in self.experience_points)

    @property
    def is_member(self) -> bool:
        return self.community_id is not None

    def award(self, points: int, timestamp: datetime | None = None) -> ExperiencePoint:
        """Append a new experience entry and return it."""
        entry = ExperiencePoint.create(points, timestamp)
        self.experience_points.append(entry)
        return entry

    def check_can_join(self) -> None:
        """Raises AlreadyInCommunityError unless the user is unaffiliated."""
        if self.is_member:
            raise AlreadyInCommunityError(self.community_id)

    def check_can_leave(self) -> None:
        """Raises NotInCommunityError unless the user is a member."""
        if not self.is_member:
            raise NotInCommunityError()


@dataclass
class PopulatedUser:
    """User with its community reference resolved, for display."""
    user: User
    community: Community | None = None
