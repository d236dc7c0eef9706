"""
module: chat_api.py
description: 접근성 디자인 어시스턴트 챗봇 API (Netlify 함수 ai-chatbot 대체)
dependencies:
    - fastapi
    - app.ai_pipeline.chatbot.service
"""

import json
import time
import traceback
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from app.ai_pipeline.chatbot.errors import ChatbotError
from app.ai_pipeline.chatbot.models import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    QuickChatResponse,
    ResponseMetadata,
)
from app.ai_pipeline.chatbot.service import AccessibilityAssistant, build_assistant
from app.config.constants import CORS_HEADERS, MAX_MESSAGE_LENGTH
from app.config.logger import logger
from app.config.settings import Settings, get_settings

router = APIRouter(tags=["AI Chatbot"])

CHAT_PATH = "/ai-chatbot"
SERVICE_ERROR = "AI 서비스 오류"
# POST / OPTIONS 외 모든 표준 메서드는 405 (CORS 헤더 포함)
NOT_ALLOWED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]

AssistantBuilder = Callable[[Settings], AccessibilityAssistant]


def get_assistant_builder() -> AssistantBuilder:
    """요청마다 새 어시스턴트를 만드는 팩토리 (테스트에서 override)."""
    return build_assistant


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _json(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


def _error(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return _json(status_code, body.model_dump(exclude_none=True))


def _service_error(exc: Exception, settings: Settings) -> JSONResponse:
    if isinstance(exc, ChatbotError):
        status_code, message = exc.status_code, exc.message
    else:
        status_code = 500
        message = str(exc) or "일시적인 오류가 발생했습니다. 잠시 후 다시 시도해주세요."

    body = ErrorResponse(error=SERVICE_ERROR, message=message)
    if settings.is_development:
        # 개발 환경에서만 상세 오류 노출 (원인 오류 포함)
        root = exc.__cause__ or exc
        body.stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        body.details = f"{type(root).__name__}: {root}"
    return _json(status_code, body.model_dump(exclude_none=True))


@router.options(CHAT_PATH)
async def chat_preflight() -> Response:
    """CORS preflight. 설정 여부와 관계없이 항상 200."""
    return Response(status_code=200, content=b"", headers=CORS_HEADERS)


@router.api_route(CHAT_PATH, methods=NOT_ALLOWED_METHODS, include_in_schema=False)
async def chat_method_not_allowed() -> JSONResponse:
    return _json(405, {"error": "Method Not Allowed"})


@router.post(CHAT_PATH)
async def chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    assistant_builder: AssistantBuilder = Depends(get_assistant_builder),
) -> JSONResponse:
    """
    사용자 메시지 + (선택) 분석 컨텍스트 + 최근 히스토리를 받아 AI 답변 반환

    - 빠른 응답 키워드가 있으면 LLM 호출 없이 고정 답변
    - 오류는 종류에 따라 503 / 429 / 504 / 500
    """
    if not settings.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY 환경변수가 설정되지 않았습니다.")
        return _error(503, "AI 서비스 설정 오류", "AI 서비스가 올바르게 구성되지 않았습니다.")

    raw_body = await request.body()
    try:
        payload = json.loads(raw_body or b"{}")
    except ValueError:
        return _error(400, "잘못된 요청 형식입니다.", "요청 본문은 JSON 이어야 합니다.")

    message = payload.get("message") if isinstance(payload, dict) else None
    if not isinstance(message, str) or not message.strip():
        return _error(
            400,
            "메시지가 필요합니다.",
            "message 필드는 필수이며 비어있지 않은 문자열이어야 합니다.",
        )

    if len(message) > MAX_MESSAGE_LENGTH:
        return _error(400, "메시지가 너무 깁니다.", f"메시지는 {MAX_MESSAGE_LENGTH}자 이하여야 합니다.")

    try:
        chat_request = ChatRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"챗봇 요청 검증 실패: {e.error_count()}건")
        return _error(400, "잘못된 요청 형식입니다.", "context 또는 history 형식이 올바르지 않습니다.")

    try:
        assistant = assistant_builder(settings)

        quick_response = assistant.get_quick_response(chat_request.message)
        if quick_response:
            logger.debug("빠른 응답 반환 (LLM 호출 생략)")
            body = QuickChatResponse(reply=quick_response, timestamp=_utc_timestamp())
            return _json(200, body.model_dump())

        logger.info(
            f"챗봇 요청: message_len={len(chat_request.message)}, "
            f"context={chat_request.context is not None}, history={len(chat_request.history)}"
        )
        start = time.perf_counter()
        result = await assistant.generate_response(
            chat_request.message, chat_request.context, chat_request.history
        )
        response_time = int((time.perf_counter() - start) * 1000)

        logger.info(f"AI 응답 생성 완료 - 소요시간: {response_time}ms, 모델: {result.model}")

        body = ChatResponse(
            reply=result.reply,
            metadata=ResponseMetadata(
                model=result.model,
                responseTime=response_time,
                usage=result.usage,
                timestamp=_utc_timestamp(),
            ),
        )
        return _json(200, body.model_dump())

    except Exception as e:
        logger.error(f"❌ AI 챗봇 처리 실패: {e}")
        return _service_error(e, settings)
