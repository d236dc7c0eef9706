# app/utils/text_utils.py

import re

from app.config.constants import MAX_MESSAGE_LENGTH

TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")


def sanitize_message(message: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """
    LLM에 넘기기 전 사용자 메시지 정리
    - <...> 태그 제거
    - 연속 공백을 하나로, 양 끝 공백 제거
    - 정리 후 max_length 초과 시 잘라내고 "..." 추가
    이미 정리된 문자열에 다시 적용해도 결과가 같다.
    """
    message = TAG_PATTERN.sub("", message)
    message = WHITESPACE_PATTERN.sub(" ", message).strip()
    if len(message) > max_length:
        message = message[:max_length] + "..."
    return message
