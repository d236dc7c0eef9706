"""
module: constants.py
description: 전역 상수, Enum 정의
"""
from enum import Enum


class ErrorKind(str, Enum):
    """챗봇 오류 분류. 각 값은 HTTP 상태 코드 하나에 대응한다."""
    VALIDATION = "validation"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFIGURATION = "configuration"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"


ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.CONFIGURATION: 503,
    ErrorKind.RATE_LIMIT: 429,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.UPSTREAM: 500,
}

# 메시지 / 히스토리 제한
MAX_MESSAGE_LENGTH = 2000
MAX_HISTORY_MESSAGES = 10
MAX_CONTEXT_ISSUES = 3

# 응답 시간 제한 (초)
RESPONSE_TIMEOUT_SECONDS = 8.0

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"

# chat.completions 고정 파라미터
COMPLETION_PARAMS = {
    "max_tokens": 1000,
    "temperature": 0.7,
    "frequency_penalty": 0.1,
    "presence_penalty": 0.1,
}

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}
