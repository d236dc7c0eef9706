# chatbot/errors.py
"""
챗봇 오류 분류.

호출 경로가 종류를 알고 있으면(타임아웃, 인증 실패, rate limit) 명시적으로
ErrorKind 를 지정하고, 그 외 provider 오류는 메시지 문자열 매칭으로 분류한다.
문자열 매칭은 best-effort 이며 보장된 계약이 아니다.
"""

import asyncio

import openai

from app.config.constants import ERROR_STATUS_CODES, ErrorKind

USER_MESSAGES = {
    ErrorKind.VALIDATION: "요청 형식이 올바르지 않습니다.",
    ErrorKind.METHOD_NOT_ALLOWED: "POST 요청만 허용됩니다.",
    ErrorKind.CONFIGURATION: "AI 서비스 설정에 문제가 있습니다.",
    ErrorKind.RATE_LIMIT: "너무 많은 요청이 발생했습니다. 잠시 후 다시 시도해주세요.",
    ErrorKind.TIMEOUT: "응답 시간이 초과되었습니다. 질문을 더 간단히 해보시거나 잠시 후 다시 시도해주세요.",
    ErrorKind.UPSTREAM: "AI 서비스에 일시적인 문제가 발생했습니다. 잠시 후 다시 시도해주세요.",
}

TIMEOUT_MARKERS = ("응답 시간 초과", "timed out", "timeout")


class ChatbotError(Exception):
    """사용자에게 그대로 보여줄 메시지를 가진 챗봇 오류."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or USER_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ChatbotError":
        """원본 오류를 분류해 사용자용 메시지를 가진 새 오류를 만든다."""
        return cls(classify_error(exc))


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ChatbotError):
        return exc.kind
    if isinstance(exc, (asyncio.TimeoutError, openai.APITimeoutError)):
        return ErrorKind.TIMEOUT
    if isinstance(exc, openai.AuthenticationError):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, openai.RateLimitError):
        return ErrorKind.RATE_LIMIT

    text = str(exc).lower()
    if "api key" in text:
        return ErrorKind.CONFIGURATION
    if "rate limit" in text:
        return ErrorKind.RATE_LIMIT
    if any(marker in text for marker in TIMEOUT_MARKERS):
        return ErrorKind.TIMEOUT
    return ErrorKind.UPSTREAM
