from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from sproutlog.core.deps import CurrentUser, get_user_repository, user_from_token
from sproutlog.core.security import create_access_token, create_refresh_token
from sproutlog.models.user import User
from sproutlog.repositories import UserRepository
from sproutlog.schemas.auth import RefreshRequest, TokenResponse
from sproutlog.schemas.user import UserCreate, UserRead, UserStats
from sproutlog.services.user_service import authenticate, get_user_stats, record_login, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(str(user.id), user.role),
        refresh_token=create_refresh_token(str(user.id)),
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, users: UserRepository = Depends(get_user_repository)):
    if await users.get_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    return await register_user(users, data)


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    users: UserRepository = Depends(get_user_repository),
):
    user = await authenticate(users, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Account disabled")
    return _issue_tokens(await record_login(users, user))


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, users: UserRepository = Depends(get_user_repository)):
    user = await user_from_token(users, body.refresh_token, "refresh")
    return _issue_tokens(user)


@router.get("/me", response_model=UserRead)
async def me(current_user: CurrentUser):
    return current_user


@router.get("/me/stats", response_model=UserStats)
async def me_stats(current_user: CurrentUser, users: UserRepository = Depends(get_user_repository)):
    return await get_user_stats(users, current_user.id)
