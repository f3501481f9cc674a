"""Farmer chat route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.schemas.chat import ChatRequest, ChatResponse
from app.services.chat_service import ChatService
from app.services.llm_service import LLMService

router = APIRouter(prefix="/chat", tags=["chat"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="chat failure")


@router.post("", response_model=ChatResponse)
async def chat(
	payload: ChatRequest,
	request: Request,
	db: AsyncSession = Depends(get_db),
) -> ChatResponse:
	settings = get_settings()
	api_key = request.headers.get(settings.llm_api_key_header_name)
	service = ChatService(db, LLMService(settings=settings, api_key=api_key))
	try:
		return await service.reply(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
