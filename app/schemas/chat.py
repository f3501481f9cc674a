"""Pydantic schemas for the farmer chat endpoint."""

from __future__ import annotations

import uuid
from enum import StrEnum

from pydantic import BaseModel, Field

from app.schemas.prediction import PredictionResult


class ReplySource(StrEnum):
	prediction = "prediction"
	llm = "llm"
	fallback = "fallback"


class ChatRequest(BaseModel):
	message: str = Field(min_length=1, max_length=2000)
	profile_id: uuid.UUID | None = None
	dataset_ids: list[uuid.UUID] = Field(default_factory=list)


class ChatResponse(BaseModel):
	reply: str
	source: ReplySource
	prediction: PredictionResult | None = None
	insights: list[str] = Field(default_factory=list)
