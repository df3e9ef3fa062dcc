"""User API routes.

Endpoints:
- GET /user: All users with total experience and resolved community
- POST /user: Create a user
- GET /user/{id}: Full user record
- POST /user/{id}/points: Award experience points
- POST /user/{userId}/join/{communityId}: Join a community
- DELETE /user/{userId}/leave: Leave the current community
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_community_repo, get_leaderboard, get_user_repo
from api.models import (
    AwardPointsRequest,
    CommunityResponse,
    CreateUserRequest,
    ExperiencePointResponse,
    MessageResponse,
    UserResponse,
    UserWithPointsResponse,
)
from domain.model.errors import (
    InvalidIdentifierError,
    MembershipError,
    NotFoundError,
    ValidationError,
)
from domain.model.leaderboard import UserWithPoints
from domain.model.user import User
from port.community_repository import CommunityRepository
from port.leaderboard import LeaderboardPort
from port.user_repository import UserRepository
from services.accessor import UserAccessor
from services.membership_service import join_community, leave_community
from services.user_service import award_points, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["users"])


def _to_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(
        id=user.id,
        email=user.email,
        profile_picture=user.profile_picture,
        experience_points=[
            ExperiencePointResponse(points=e.points, timestamp=e.timestamp)
            for e in user.experience_points
        ],
        community=user.community_id,
    )


def _to_points_response(entry: UserWithPoints) -> UserWithPointsResponse:
    community = None
    if entry.community:
        community = CommunityResponse(
            id=entry.community.id,
            name=entry.community.name,
            logo=entry.community.logo,
        )
    return UserWithPointsResponse(
        id=entry.id,
        email=entry.email,
        profile_picture=entry.profile_picture,
        community=community,
        total_experience=entry.total_experience,
    )


@router.get("", response_model=list[UserWithPointsResponse])
def list_users(leaderboard: LeaderboardPort = Depends(get_leaderboard)):
    """Get every user with their total experience. Order is not guaranteed."""
    return [_to_points_response(u) for u in leaderboard.users_with_points()]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    request: CreateUserRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Create a user. The password is stored as a bcrypt hash."""
    try:
        user = create_user(
            repo,
            email=request.email,
            password=request.password,
            profile_picture=request.profile_picture,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _to_response(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    """Get a single user by ID."""
    try:
        user = UserAccessor(repo).load_by_id(user_id)
    except (InvalidIdentifierError, NotFoundError):
        raise HTTPException(status_code=404, detail="User not found")
    return _to_response(user)


@router.post("/{user_id}/points", response_model=UserResponse)
def award_points_endpoint(
    user_id: str,
    request: AwardPointsRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Append an experience award to a user."""
    try:
        user = award_points(repo, user_id, request.points, request.timestamp)
    except (InvalidIdentifierError, NotFoundError):
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(user)


@router.post("/{user_id}/join/{community_id}", response_model=MessageResponse)
def join(
    user_id: str,
    community_id: str,
    users: UserRepository = Depends(get_user_repo),
    communities: CommunityRepository = Depends(get_community_repo),
):
    """Add a user to a community. The user must not already be a member of one."""
    try:
        join_community(users, communities, user_id, community_id)
    except (ValidationError, NotFoundError, MembershipError) as e:
        logger.info("Join rejected", extra={"userId": user_id, "communityId": community_id, "reason": str(e)})
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="User joined community")


@router.delete("/{user_id}/leave", response_model=MessageResponse)
def leave(user_id: str, users: UserRepository = Depends(get_user_repo)):
    """Remove a user from their community."""
    try:
        leave_community(users, user_id)
    except (ValidationError, NotFoundError, MembershipError) as e:
        logger.info("Leave rejected", extra={"userId": user_id, "reason": str(e)})
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="User left community")
