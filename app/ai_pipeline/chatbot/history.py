# chatbot/history.py
from typing import List, Sequence
from .models import ChatMessage

from app.config.constants import MAX_HISTORY_MESSAGES


def recent_history(
    history: Sequence[ChatMessage] | None,
    limit: int = MAX_HISTORY_MESSAGES,
) -> List[ChatMessage]:
    """
    프론트가 보낸 히스토리 중 최근 limit 개만 원래 순서대로 반환.
    서버 쪽 저장소는 없다 (요청마다 프론트가 히스토리를 보낸다).
    """
    if not history or limit <= 0:
        return []
    return list(history[-limit:])
