from sproutlog.repositories.base import InMemoryRepository, Repository, SqlAlchemyRepository
from sproutlog.repositories.planting import LocationRepository, PlantingRepository, PlantRepository
from sproutlog.repositories.user import UserRepository

__all__ = [
    "Repository",
    "SqlAlchemyRepository",
    "InMemoryRepository",
    "PlantRepository",
    "LocationRepository",
    "PlantingRepository",
    "UserRepository",
]
