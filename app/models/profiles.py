"""FarmerProfile ORM model: answers collected by the onboarding questionnaire."""

from __future__ import annotations

from sqlalchemy import String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class FarmerProfile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A farmer and the farm conditions used to tailor advice.

    ``planting_date`` holds the season label picked in the questionnaire
    (``"Spring"``, ``"Kharif"``, ...), which is what the compatibility
    evaluator matches against.
    """

    __tablename__ = "farmer_profiles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    farm_size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    experience: Mapped[str | None] = mapped_column(String(100), nullable=True)
    crop_types: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        server_default=text("'[]'::jsonb"),
    )
    main_challenges: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        server_default=text("'[]'::jsonb"),
    )
    soil_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    planting_date: Mapped[str | None] = mapped_column(String(100), nullable=True)
    irrigation_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<FarmerProfile id={self.id} name={self.name!r}>"
