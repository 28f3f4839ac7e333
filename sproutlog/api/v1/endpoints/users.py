from fastapi import APIRouter, Depends

from sproutlog.core.deps import CurrentUser, get_user_repository
from sproutlog.repositories import UserRepository
from sproutlog.schemas.user import UserRead, UserUpdate
from sproutlog.services.user_service import update_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def read_profile(current_user: CurrentUser):
    return current_user


@router.patch("/me", response_model=UserRead)
async def edit_profile(
    body: UserUpdate,
    current_user: CurrentUser,
    users: UserRepository = Depends(get_user_repository),
):
    return await update_profile(users, current_user, body)
