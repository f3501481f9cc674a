"""LLM integration: profile-aware prompts for Mistral chat completions with offline advice as fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import Settings, get_settings
from app.schemas.chat import ReplySource
from app.schemas.profile import FarmerProfileIn

_logger = logging.getLogger("farmchat.llm")

EMPTY_COMPLETION_REPLY = (
	"I apologize, but I was unable to generate a response. "
	"Could you please try rephrasing your question?"
)

FALLBACK_PREFIX = "I'm having trouble connecting to my AI brain right now, but here's some basic advice: "

# First matching keyword group wins.
FALLBACK_ADVICE: tuple[tuple[tuple[str, ...], str], ...] = (
	(
		("wheat", "grain"),
		"Wheat farming requires proper soil preparation and timing. Consider soil testing for "
		"optimal fertilizer application. Plant in early spring for best yields.",
	),
	(
		("corn", "maize"),
		"Corn benefits from nitrogen-rich soil. Monitor for pests like corn borers. Ensure "
		"adequate spacing between plants for maximum growth.",
	),
	(
		("tomato",),
		"Tomatoes need well-drained soil and consistent watering. Use stakes or cages for "
		"support. Watch for blight and other diseases.",
	),
	(
		("pest", "bug", "insect"),
		"Integrated Pest Management (IPM) is recommended. Use beneficial insects, crop rotation, "
		"and targeted treatments only when necessary.",
	),
	(
		("weather", "rain", "drought"),
		"Monitor weather forecasts closely. Consider drought-resistant varieties if water is "
		"limited. Proper drainage is crucial during heavy rains.",
	),
	(
		("soil", "fertilizer"),
		"Regular soil testing is essential. Maintain proper pH levels and organic matter content. "
		"Consider cover crops to improve soil health.",
	),
	(
		("price", "market", "sell"),
		"Diversify your crops to reduce market risk. Stay informed about commodity prices and "
		"consider direct-to-consumer sales for better margins.",
	),
)

DEFAULT_ADVICE = (
	"Farming success comes from careful planning, soil management, and adapting to local "
	"conditions. Consider consulting with local agricultural extension services."
)


class LLMResponseError(RuntimeError):
	"""The completion payload did not have the expected shape."""


@dataclass(slots=True)
class LLMReply:
	text: str
	source: ReplySource


class LLMService:
	def __init__(
		self,
		settings: Settings | None = None,
		api_key: str | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.settings = settings or get_settings()
		self.api_key = api_key or self.settings.mistral_api_key
		self.transport = transport

	@staticmethod
	def build_system_prompt(profile: FarmerProfileIn | None) -> str:
		profile = profile or FarmerProfileIn(name="Unknown")
		lines = [
			"You are an expert AI farming assistant helping farmers with their agricultural questions.",
			"",
			"Farmer Profile:",
			f"- Name: {profile.name or 'Unknown'}",
			f"- Farm Size: {profile.farm_size or 'Unknown'}",
			f"- Location: {profile.location or 'Unknown'}",
			f"- Experience: {profile.experience or 'Unknown'}",
			f"- Crops: {', '.join(profile.crop_types) or 'Various'}",
			f"- Main Challenges: {', '.join(profile.main_challenges) or 'General farming'}",
		]
		if profile.soil_type:
			lines.append(f"- Soil Type: {profile.soil_type}")
		if profile.irrigation_type:
			lines.append(f"- Irrigation: {profile.irrigation_type}")
		if profile.planting_date:
			lines.append(f"- Planting Season: {profile.planting_date}")
		lines.extend(
			[
				"",
				"Provide practical, actionable farming advice tailored to this farmer's specific "
				"situation. Be conversational, helpful, and focus on solutions. Keep responses "
				"concise but informative.",
			]
		)
		return "\n".join(lines)

	async def generate_reply(self, message: str, profile: FarmerProfileIn | None) -> LLMReply:
		if not self.api_key:
			return LLMReply(text=self.fallback_reply(message), source=ReplySource.fallback)

		try:
			text = await self.call_llm(message=message, system_prompt=self.build_system_prompt(profile))
		except (httpx.HTTPError, LLMResponseError) as exc:
			_logger.warning("llm_call_failed", extra={"error": str(exc), "model": self.settings.mistral_model})
			return LLMReply(text=self.fallback_reply(message), source=ReplySource.fallback)
		return LLMReply(text=text, source=ReplySource.llm)

	async def call_llm(self, *, message: str, system_prompt: str) -> str:
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		body = {
			"model": self.settings.mistral_model,
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": message},
			],
			"temperature": self.settings.mistral_temperature,
			"max_tokens": self.settings.mistral_max_tokens,
		}

		async with httpx.AsyncClient(
			timeout=self.settings.mistral_timeout_seconds,
			transport=self.transport,
		) as client:
			response = await client.post(self.settings.mistral_base_url, headers=headers, json=body)
			response.raise_for_status()
			try:
				payload = response.json()
			except ValueError as exc:
				raise LLMResponseError("completion body is not JSON") from exc

		return self.parse_completion(payload)

	@staticmethod
	def parse_completion(payload: Any) -> str:
		if not isinstance(payload, dict):
			raise LLMResponseError("completion payload is not an object")
		choices = payload.get("choices")
		if not isinstance(choices, list):
			raise LLMResponseError("completion payload has no choices")
		if not choices:
			return EMPTY_COMPLETION_REPLY
		message = choices[0].get("message") if isinstance(choices[0], dict) else None
		content = message.get("content") if isinstance(message, dict) else None
		text = str(content or "").strip()
		return text or EMPTY_COMPLETION_REPLY

	@staticmethod
	def fallback_reply(message: str) -> str:
		normalized = message.lower()
		for keywords, advice in FALLBACK_ADVICE:
			if any(word in normalized for word in keywords):
				return FALLBACK_PREFIX + advice
		return FALLBACK_PREFIX + DEFAULT_ADVICE
