"""Port for cross-collection experience aggregates."""

from typing import Protocol

from domain.model.leaderboard import CommunityRanking, UserWithPoints


class LeaderboardPort(Protocol):
    """Protocol for read-only experience queries spanning users and communities.

    Separated from the repositories (CRUD) to clarify intent:
    repositories handle individual aggregate persistence,
    this port handles derived read models.
    """

    def rank_communities(self) -> list[CommunityRanking]:
        """Communities with members, sorted by total points desc, then community ID asc."""
        ...

    def users_with_points(self) -> list[UserWithPoints]:
        """Every user with total experience and resolved community. Order is not guaranteed."""
        ...
