"""Community API routes.

Endpoints:
- GET /community/leaderboard: Communities ranked by members' total experience
- GET /community/{id}: Single community
- GET /community: All communities
- POST /community: Create a community
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_community_repo, get_leaderboard
from api.models import CommunityResponse, CreateCommunityRequest, LeaderboardEntryResponse
from domain.model.community import Community
from domain.model.errors import DuplicateError, InvalidIdentifierError, NotFoundError, ValidationError
from port.community_repository import CommunityRepository
from port.leaderboard import LeaderboardPort
from services.accessor import CommunityAccessor
from services.community_service import create_community

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/community", tags=["communities"])


def _to_response(community: Community) -> CommunityResponse:
    return CommunityResponse(id=community.id, name=community.name, logo=community.logo)


@router.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
def get_leaderboard_endpoint(leaderboard: LeaderboardPort = Depends(get_leaderboard)):
    """Rank communities by the summed experience of their members.

    Communities without members are not listed. Ties are ordered by community ID.
    """
    rankings = leaderboard.rank_communities()
    return [
        LeaderboardEntryResponse(
            community_id=r.community_id,
            total_points=r.total_points,
            logo=r.logo,
            name=r.name,
            user_count=r.user_count,
        )
        for r in rankings
    ]


@router.get("/{community_id}", response_model=CommunityResponse)
def get_community(community_id: str, repo: CommunityRepository = Depends(get_community_repo)):
    """Get a single community by ID."""
    try:
        community = CommunityAccessor(repo).load_by_id(community_id)
    except (InvalidIdentifierError, NotFoundError):
        raise HTTPException(status_code=404, detail="Community not found")
    return _to_response(community)


@router.get("", response_model=list[CommunityResponse])
def list_communities(repo: CommunityRepository = Depends(get_community_repo)):
    """Get all communities."""
    return [_to_response(c) for c in repo.list_all()]


@router.post("", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
def create_community_endpoint(
    request: CreateCommunityRequest,
    repo: CommunityRepository = Depends(get_community_repo),
):
    """Create a community. Names are unique."""
    try:
        community = create_community(repo, name=request.name, logo=request.logo)
    except DuplicateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(community)
