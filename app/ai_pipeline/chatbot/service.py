# chatbot/service.py
import asyncio
from typing import List, Optional, Sequence

from app.ai_pipeline.prompts.assistant_prompt import (
    SYSTEM_PROMPT,
    build_context_prompt,
    find_quick_response,
)
from app.config.constants import COMPLETION_PARAMS, RESPONSE_TIMEOUT_SECONDS, ErrorKind
from app.config.logger import logger
from app.config.settings import Settings
from app.utils.text_utils import sanitize_message

from .errors import ChatbotError
from .history import recent_history
from .llm_client import LLMClient
from .models import AnalysisContext, AssistantReply, ChatMessage


class AccessibilityAssistant:
    """
    요청 하나를 처리하는 상태 없는 서비스:
    - system 페르소나 + (선택) 분석 컨텍스트 + 최근 히스토리 + 정리된 user 메시지로 프롬프트 구성
    - 타임아웃과 경쟁시키며 LLM 호출
    - 실패는 사용자용 메시지를 가진 ChatbotError 로 변환
    """

    def __init__(
        self,
        llm_client: LLMClient,
        timeout: float = RESPONSE_TIMEOUT_SECONDS,
        system_prompt: str | None = None,
    ) -> None:
        self.llm = llm_client
        self.timeout = timeout
        self.system_prompt = system_prompt or SYSTEM_PROMPT

    def build_messages(
        self,
        user_message: str,
        context: Optional[AnalysisContext] = None,
        history: Optional[Sequence[ChatMessage]] = None,
    ) -> List[ChatMessage]:
        # 순서: 페르소나 → 분석 컨텍스트 → 히스토리 → 현재 질문
        messages = [ChatMessage(role="system", content=self.system_prompt)]

        if context is not None and context.summary is not None:
            messages.append(ChatMessage(role="system", content=build_context_prompt(context)))

        messages.extend(recent_history(history))
        messages.append(ChatMessage(role="user", content=sanitize_message(user_message)))
        return messages

    async def generate_response(
        self,
        user_message: str,
        context: Optional[AnalysisContext] = None,
        history: Optional[Sequence[ChatMessage]] = None,
    ) -> AssistantReply:
        messages = self.build_messages(user_message, context, history)

        try:
            completion = await asyncio.wait_for(
                self.llm.chat(messages, **COMPLETION_PARAMS),
                timeout=self.timeout,
            )
            reply = completion.choices[0].message.content if completion.choices else None
            if not reply:
                raise ChatbotError(ErrorKind.UPSTREAM, "AI로부터 응답을 받지 못했습니다.")
        except asyncio.TimeoutError as exc:
            logger.error(f"AI 응답 생성 오류: 응답 시간 초과 ({self.timeout}s)")
            raise ChatbotError(ErrorKind.TIMEOUT) from exc
        except Exception as exc:
            logger.exception(f"AI 응답 생성 오류: {exc}")
            raise ChatbotError.from_exception(exc) from exc

        usage = completion.usage.model_dump() if completion.usage is not None else None
        return AssistantReply(reply=reply.strip(), usage=usage, model=completion.model)

    def get_quick_response(self, message: str) -> Optional[str]:
        """자주 묻는 질문이면 LLM 호출 없이 고정 답변 반환, 아니면 None."""
        return find_quick_response(message)


def build_assistant(settings: Settings) -> AccessibilityAssistant:
    llm_client = LLMClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
    )
    return AccessibilityAssistant(llm_client, timeout=settings.CHAT_RESPONSE_TIMEOUT)
