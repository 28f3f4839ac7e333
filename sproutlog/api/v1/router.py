from fastapi import APIRouter

from sproutlog.api.v1.endpoints import auth, gardens, locations, plantings, plants, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(gardens.router)
api_router.include_router(locations.router)
api_router.include_router(plants.router)
api_router.include_router(plantings.router)
