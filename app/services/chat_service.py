"""Chat orchestration: local dataset prediction first, then LLM narrative."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.chat import ChatRequest, ChatResponse, ReplySource
from app.schemas.dataset import DatasetIn
from app.schemas.prediction import PredictionResult
from app.schemas.profile import FarmerProfileIn
from app.services import prediction_service
from app.services.dataset_service import DatasetService, to_dataset_in
from app.services.llm_service import LLMService
from app.services.profile_service import ProfileService


class ChatService:
	def __init__(self, db: AsyncSession, llm: LLMService | None = None):
		self.db = db
		self.llm = llm or LLMService()

	async def reply(self, request: ChatRequest) -> ChatResponse:
		profile = await self._load_profile(request.profile_id)
		datasets = await self._load_datasets(request.dataset_ids)
		return await self.answer(request.message, profile, datasets)

	async def answer(
		self,
		message: str,
		profile: FarmerProfileIn | None,
		datasets: Sequence[DatasetIn],
	) -> ChatResponse:
		prediction = prediction_service.predict(message, profile, datasets) if datasets else None
		insights = prediction_service.summarize_datasets(datasets)

		if prediction is None:
			llm_reply = await self.llm.generate_reply(message, profile)
			return ChatResponse(reply=llm_reply.text, source=llm_reply.source, insights=insights)

		llm_reply = await self.llm.generate_reply(self.narrative_prompt(message, prediction), profile)
		return ChatResponse(
			reply=self.combine(prediction, llm_reply.text),
			source=ReplySource.prediction,
			prediction=prediction,
			insights=insights,
		)

	@staticmethod
	def narrative_prompt(message: str, prediction: PredictionResult) -> str:
		return (
			f"{message}\n\n"
			f"Analysis of the farmer's own uploaded data: {prediction.explanation} "
			"Add practical context and next steps for this result without repeating the numbers."
		)

	@staticmethod
	def combine(prediction: PredictionResult, narrative: str) -> str:
		return f"{prediction_service.describe_prediction(prediction)}\n\n🤖 AI Insights:\n{narrative}"

	async def _load_profile(self, profile_id: uuid.UUID | None) -> FarmerProfileIn | None:
		if profile_id is None:
			return None
		profile = await ProfileService(self.db).get_profile(profile_id)
		return ProfileService.to_schema(profile)

	async def _load_datasets(self, dataset_ids: Sequence[uuid.UUID]) -> list[DatasetIn]:
		datasets = await DatasetService(self.db).get_many(dataset_ids)
		return [to_dataset_in(dataset) for dataset in datasets]
