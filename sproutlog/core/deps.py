from datetime import date
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.core.security import decode_token
from sproutlog.db.session import get_db
from sproutlog.models.garden import Garden, GardenCollaborator
from sproutlog.models.user import User
from sproutlog.repositories import LocationRepository, PlantingRepository, PlantRepository, UserRepository
from sproutlog.services.lifecycle import to_date
from sproutlog.services.user_service import local_today

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

ROLE_OWNER = "owner"
ROLE_EDITOR = "editor"
ROLE_VIEWER = "viewer"


# ── Repositories ──────────────────────────────────────────────────────────────


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_plant_repository(db: AsyncSession = Depends(get_db)) -> PlantRepository:
    return PlantRepository(db)


def get_location_repository(db: AsyncSession = Depends(get_db)) -> LocationRepository:
    return LocationRepository(db)


def get_planting_repository(db: AsyncSession = Depends(get_db)) -> PlantingRepository:
    return PlantingRepository(db)


# ── Authentication ────────────────────────────────────────────────────────────


def credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def user_from_token(users: UserRepository, token: str, token_type: str) -> User:
    """Resolve an access or refresh token to an active user, or raise 401."""
    try:
        payload = decode_token(token)
        user_id = int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise credentials_error()
    if payload.get("type") != token_type:
        raise credentials_error()

    user = await users.get(user_id)
    if not user or not user.is_active:
        raise credentials_error()
    return user


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    users: UserRepository = Depends(get_user_repository),
) -> User:
    return await user_from_token(users, token, "access")


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]


async def get_reference_date(
    current_user: CurrentUser,
    as_of: Optional[str] = Query(
        None, description="Reference date (YYYY-MM-DD), defaults to today in the user's time zone"
    ),
) -> date:
    return to_date(as_of) if as_of else local_today(current_user)


ReferenceDate = Annotated[date, Depends(get_reference_date)]


# ── Garden access ─────────────────────────────────────────────────────────────


async def get_garden_role(db: AsyncSession, garden: Garden, user_id: int) -> str | None:
    if garden.user_id == user_id:
        return ROLE_OWNER
    return await db.scalar(
        select(GardenCollaborator.role).where(
            GardenCollaborator.garden_id == garden.id,
            GardenCollaborator.user_id == user_id,
        )
    )


async def get_accessible_garden(
    db: AsyncSession, garden_id: int, user: User, write: bool = False, owner_only: bool = False
) -> tuple[Garden, str]:
    """Load a garden the user can see and return it with the user's role.

    404 when the garden does not exist or the user has no role on it, 403 when
    the role is too weak for the requested access.
    """
    result = await db.execute(select(Garden).where(Garden.id == garden_id))
    garden = result.scalar_one_or_none()
    role = await get_garden_role(db, garden, user.id) if garden else None
    if not garden or not role:
        raise HTTPException(status_code=404, detail="Garden not found")
    if owner_only and role != ROLE_OWNER:
        raise HTTPException(status_code=403, detail="Only the garden owner can do that")
    if write and role == ROLE_VIEWER:
        raise HTTPException(status_code=403, detail="Read-only access to this garden")
    return garden, role
