"""CSV parsing and persistence for user-uploaded farming datasets."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.datasets import FarmingDataset
from app.models.enums import DatasetTypeEnum
from app.schemas.dataset import CellValue, DatasetIn
from app.services.parsing import parse_number
from app.services.profile_service import ProfileService

_logger = logging.getLogger("farmchat.datasets")


def _clean_cell(raw: str) -> str:
	return raw.strip().replace('"', "")


def parse_csv(text: str, name: str) -> DatasetIn:
	"""Parse comma-separated text into columns and rows.

	Lines are split on ``\\n`` and commas only; quoted fields containing commas
	are not supported. Cells with a leading number become floats.
	"""
	lines = [line for line in text.split("\n") if line.strip()]
	if len(lines) < 2:
		raise ValueError("CSV must have at least a header and one data row")

	headers = [_clean_cell(cell) for cell in lines[0].split(",")]
	rows: list[dict[str, CellValue]] = []
	for line in lines[1:]:
		values = [_clean_cell(cell) for cell in line.split(",")]
		row: dict[str, CellValue] = {}
		for index, header in enumerate(headers):
			value = values[index] if index < len(values) else ""
			number = parse_number(value)
			row[header] = value if number is None else number
		rows.append(row)

	return DatasetIn(name=name, columns=headers, rows=rows)


def to_dataset_in(dataset: FarmingDataset) -> DatasetIn:
	return DatasetIn(name=dataset.name, columns=list(dataset.columns), rows=list(dataset.data))


class DatasetService:
	"""Service for storing, listing and loading parsed datasets."""

	def __init__(self, db: AsyncSession):
		self.db = db

	async def upload_csv(
		self,
		filename: str,
		content: bytes,
		profile_id: uuid.UUID | None = None,
	) -> FarmingDataset:
		if not filename.lower().endswith(".csv"):
			raise ValueError(f"{filename}: only CSV files are supported")
		if profile_id is not None:
			await ProfileService(self.db).get_profile(profile_id)

		parsed = parse_csv(content.decode("utf-8-sig"), filename)
		dataset = FarmingDataset(
			profile_id=profile_id,
			name=parsed.name,
			dataset_type=DatasetTypeEnum.csv,
			columns=parsed.columns,
			data=parsed.rows,
			size_bytes=len(content),
		)
		self.db.add(dataset)
		await self.db.flush()
		await self.db.refresh(dataset)
		_logger.info(
			"dataset_uploaded",
			extra={"dataset_id": str(dataset.id), "rows": len(parsed.rows), "columns": len(parsed.columns)},
		)
		return dataset

	async def list_datasets(self, profile_id: uuid.UUID | None = None) -> list[FarmingDataset]:
		stmt = select(FarmingDataset).order_by(FarmingDataset.created_at.desc())
		if profile_id is not None:
			stmt = stmt.where(FarmingDataset.profile_id == profile_id)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_dataset(self, dataset_id: uuid.UUID) -> FarmingDataset:
		row = await self.db.execute(select(FarmingDataset).where(FarmingDataset.id == dataset_id))
		dataset = row.scalar_one_or_none()
		if dataset is None:
			raise LookupError(f"Dataset {dataset_id} not found")
		return dataset

	async def get_many(self, dataset_ids: Sequence[uuid.UUID]) -> list[FarmingDataset]:
		"""Load datasets in the requested order; any missing id is an error."""
		if not dataset_ids:
			return []
		rows = await self.db.execute(select(FarmingDataset).where(FarmingDataset.id.in_(dataset_ids)))
		by_id = {dataset.id: dataset for dataset in rows.scalars().all()}
		missing = [str(dataset_id) for dataset_id in dataset_ids if dataset_id not in by_id]
		if missing:
			raise LookupError(f"Datasets not found: {', '.join(missing)}")
		return [by_id[dataset_id] for dataset_id in dataset_ids]

	async def delete_dataset(self, dataset_id: uuid.UUID) -> None:
		dataset = await self.get_dataset(dataset_id)
		await self.db.delete(dataset)
		await self.db.flush()
