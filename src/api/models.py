"""Pydantic models for API request/response.

Field names are exposed in camelCase and identifiers as ``_id``, matching
the documents stored in MongoDB and what the dashboard consumes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from domain.model.community import NAME_MAX_LENGTH


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain message body, used for both errors and membership changes."""
    message: str


class ExperiencePointResponse(CamelModel):
    points: int
    timestamp: datetime


class CommunityResponse(CamelModel):
    """Response model for community."""
    id: str = Field(..., alias="_id", description="Community ID")
    name: str
    logo: Optional[str] = None


class UserResponse(CamelModel):
    """Full user record. The community is an unresolved ID; the password hash is never included."""
    id: str = Field(..., alias="_id", description="User ID")
    email: str
    profile_picture: Optional[str] = None
    experience_points: list[ExperiencePointResponse] = Field(default_factory=list)
    community: Optional[str] = Field(None, description="Community ID, if the user is a member")


class UserWithPointsResponse(CamelModel):
    """User with total experience and resolved community."""
    id: str = Field(..., alias="_id", description="User ID")
    email: str
    profile_picture: Optional[str] = None
    community: Optional[CommunityResponse] = None
    total_experience: int = Field(0, description="Sum of all experience points")


class LeaderboardEntryResponse(CamelModel):
    """One community's row on the leaderboard."""
    community_id: str
    total_points: int
    logo: Optional[str] = None
    name: str
    user_count: int = Field(..., description="Number of members")


class CreateUserRequest(CamelModel):
    """Request model for creating a user."""
    email: EmailStr
    password: str
    profile_picture: Optional[str] = None


class CreateCommunityRequest(CamelModel):
    """Request model for creating a community."""
    name: str = Field(..., description=f"Trimmed before validation; at most {NAME_MAX_LENGTH} characters")
    logo: Optional[str] = None


class AwardPointsRequest(CamelModel):
    """Request model for awarding experience points."""
    points: int
    timestamp: Optional[datetime] = Field(None, description="Defaults to now (UTC)")
