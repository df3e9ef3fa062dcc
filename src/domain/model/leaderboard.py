"""Read models computed from users and communities. Never persisted."""

from dataclasses import dataclass

from domain.model.community import Community


@dataclass(frozen=True)
class CommunityRanking:
    """One leaderboard row: a community and its members' summed experience."""
    community_id: str
    name: str
    total_points: int
    user_count: int
    logo: str | None = None


@dataclass(frozen=True)
class UserWithPoints:
    """A user's public profile with total experience and resolved community."""
    id: str
    email: str
    total_experience: int
    profile_picture: str | None = None
    community: Community | None = None
