"""FarmingDataset ORM model for user-uploaded tabular data."""

from __future__ import annotations

import uuid

from sqlalchemy import Enum, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from app.models.enums import DatasetTypeEnum


class FarmingDataset(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A parsed upload: ordered column names plus rows of number-or-string cells.

    ``data`` is stored exactly as parsed (list of column→value objects) so the
    predictor can read it back without re-parsing the original file.
    """

    __tablename__ = "farming_datasets"
    __table_args__ = (
        Index("ix_farming_datasets_profile", "profile_id"),
    )

    profile_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("farmer_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dataset_type: Mapped[DatasetTypeEnum] = mapped_column(
        Enum(
            DatasetTypeEnum,
            name="dataset_type",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
        default=DatasetTypeEnum.csv,
        server_default=DatasetTypeEnum.csv.value,
    )
    columns: Mapped[list] = mapped_column(JSONB, nullable=False)
    data: Mapped[list] = mapped_column(JSONB, nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<FarmingDataset id={self.id} name={self.name!r} "
            f"rows={len(self.data or [])}>"
        )
