"""Dataset upload, listing and insight routes."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.schemas.dataset import DatasetInsightsResponse, DatasetListRead, DatasetRead, DatasetSummary
from app.services import prediction_service
from app.services.dataset_service import DatasetService, to_dataset_in

router = APIRouter(prefix="/datasets", tags=["datasets"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="dataset failure")


def _to_summary(dataset: Any) -> DatasetSummary:
	return DatasetSummary(
		id=dataset.id,
		profile_id=dataset.profile_id,
		name=dataset.name,
		dataset_type=dataset.dataset_type,
		columns=list(dataset.columns),
		row_count=len(dataset.data),
		size_bytes=dataset.size_bytes,
		created_at=dataset.created_at,
	)


@router.post("", response_model=DatasetSummary, status_code=status.HTTP_201_CREATED)
async def upload_dataset(
	file: UploadFile = File(...),
	profile_id: uuid.UUID | None = Form(default=None),
	db: AsyncSession = Depends(get_db),
) -> DatasetSummary:
	max_bytes = get_settings().dataset_max_upload_bytes
	content = await file.read(max_bytes + 1)
	if len(content) > max_bytes:
		raise HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail=f"file exceeds {max_bytes} bytes",
		)

	service = DatasetService(db)
	try:
		dataset = await service.upload_csv(file.filename or "upload.csv", content, profile_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return _to_summary(dataset)


@router.get("", response_model=DatasetListRead)
async def list_datasets(
	profile_id: uuid.UUID | None = None,
	db: AsyncSession = Depends(get_db),
) -> DatasetListRead:
	service = DatasetService(db)
	try:
		datasets = await service.list_datasets(profile_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return DatasetListRead(items=[_to_summary(dataset) for dataset in datasets])


@router.get("/insights", response_model=DatasetInsightsResponse)
async def get_dataset_insights(
	profile_id: uuid.UUID | None = None,
	db: AsyncSession = Depends(get_db),
) -> DatasetInsightsResponse:
	service = DatasetService(db)
	try:
		datasets = await service.list_datasets(profile_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	records = [to_dataset_in(dataset) for dataset in datasets]
	return DatasetInsightsResponse(
		dataset_count=len(records),
		insights=prediction_service.summarize_datasets(records),
	)


@router.get("/{dataset_id}", response_model=DatasetRead)
async def get_dataset(
	dataset_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> DatasetRead:
	service = DatasetService(db)
	try:
		dataset = await service.get_dataset(dataset_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return DatasetRead(**_to_summary(dataset).model_dump(), rows=list(dataset.data))


@router.delete("/{dataset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dataset(
	dataset_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> Response:
	service = DatasetService(db)
	try:
		await service.delete_dataset(dataset_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
