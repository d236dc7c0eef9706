# chatbot/llm_client.py
from typing import Any, List
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from app.config.constants import DEFAULT_OPENAI_MODEL, ErrorKind
from .errors import ChatbotError
from .models import ChatMessage


class LLMClient:
    """메시지 리스트를 받아 OpenAI chat.completions 에 요청하는 얇은 래퍼."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str | None = None,
    ) -> None:
        if not api_key:
            raise ChatbotError(
                ErrorKind.CONFIGURATION, "OPENAI_API_KEY 환경변수가 설정되지 않았습니다."
            )
        # 재시도 없음: 실패는 바로 호출자에게 전달
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.model = model

    async def chat(self, messages: List[ChatMessage], **params: Any) -> ChatCompletion:
        """
        messages: role/content 구조의 전체 프롬프트
        return: provider 의 ChatCompletion 원본
        """
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[m.model_dump() for m in messages],
            **params,
        )
