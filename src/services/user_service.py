"""User service — registration and experience awards.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime

import bcrypt

from domain.model.errors import ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services.accessor import UserAccessor

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
PASSWORD_MIN_LENGTH = 8


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def create_user(
    repo: UserRepository,
    email: str,
    password: str,
    profile_picture: str | None = None,
) -> User:
    """Create a user with a bcrypt-hashed password. Returns the saved User.

    Raises:
        ValidationError: password shorter than PASSWORD_MIN_LENGTH
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    user = UserAccessor.construct(
        repo,
        email=email,
        password_hash=hash_password(password),
        profile_picture=profile_picture,
    )
    user.save()
    return user.instance


def award_points(
    repo: UserRepository,
    user_id: str,
    points: int,
    timestamp: datetime | None = None,
) -> User:
    """Append an experience entry to a user and persist it.

    Raises:
        InvalidIdentifierError: user_id is malformed
        UserNotFoundError: no user with user_id
        ValidationError: points is not an integer
    """
    user = UserAccessor(repo)
    user.load_by_id(user_id)
    entry = user.add_experience(points, timestamp)
    user.save()

    logger.info("Experience awarded", extra={
        "userId": user_id,
        "points": entry.points,
        "totalExperience": user.instance.total_experience,
    })
    return user.instance
