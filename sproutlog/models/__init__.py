from sproutlog.models.user import User
from sproutlog.models.garden import Garden, GardenCollaborator, Location
from sproutlog.models.plant import Plant
from sproutlog.models.planting import Planting

__all__ = [
    "User",
    "Garden",
    "GardenCollaborator",
    "Location",
    "Plant",
    "Planting",
]
