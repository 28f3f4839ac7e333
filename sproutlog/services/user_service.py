"""
Account operations: registration, password sign-in, profile edits, and the
per-user notion of "today" that lifecycle views default to.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import tz

from sproutlog.core.security import hash_password, verify_password
from sproutlog.models.user import User
from sproutlog.repositories.user import UserRepository
from sproutlog.schemas.user import UserCreate, UserStats, UserUpdate

logger = logging.getLogger(__name__)


async def register_user(users: UserRepository, data: UserCreate) -> User:
    user = await users.add(User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        hashed_password=hash_password(data.password),
    ))
    logger.info("registered user %d", user.id)
    return user


async def authenticate(users: UserRepository, email: str, password: str) -> Optional[User]:
    user = await users.get_by_email(email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


async def record_login(users: UserRepository, user: User) -> User:
    return await users.update(user, {"last_login": datetime.now(timezone.utc)})


async def update_profile(users: UserRepository, user: User, data: UserUpdate) -> User:
    return await users.update(user, data.model_dump(exclude_unset=True))


async def get_user_stats(users: UserRepository, user_id: int) -> UserStats:
    return UserStats(**await users.garden_counts(user_id))


def local_today(user: User) -> date:
    """Today's date in the user's time zone, or the server's when none is set."""
    zone = tz.gettz(user.timezone) if user.timezone else None
    return datetime.now(zone).date()
