from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sproutlog.db.base import Base


class Planting(Base):
    __tablename__ = "plantings"

    id: Mapped[int] = mapped_column(primary_key=True)
    garden_id: Mapped[int] = mapped_column(ForeignKey("gardens.id", ondelete="CASCADE"), index=True)
    plant_id: Mapped[int] = mapped_column(ForeignKey("plants.id"), index=True)

    # Free-text location, optionally tied to one of the garden's saved locations
    location: Mapped[str] = mapped_column(String(200))
    location_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("locations.id", ondelete="SET NULL"), nullable=True, index=True
    )

    planted_date: Mapped[date] = mapped_column(Date)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Only "planted" and "harvested" are ever written; the growth stages in
    # between are computed on read from planted_date and the plant's durations.
    status: Mapped[str] = mapped_column(
        Enum(
            "planted", "sprouting", "growing", "ready", "harvested",
            name="planting_status_enum",
        ),
        default="planted",
    )

    harvested_date: Mapped[Optional[date]] = mapped_column(Date)
    harvested_quantity: Mapped[Optional[int]] = mapped_column(Integer)
    harvested_notes: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    garden: Mapped["Garden"] = relationship(back_populates="plantings")
    plant: Mapped["Plant"] = relationship(back_populates="plantings")
    location_ref: Mapped[Optional["Location"]] = relationship(back_populates="plantings")
