"""
module: health_api.py
description: 헬스체크용 API
"""
from fastapi import APIRouter, Depends
from datetime import datetime

from app.config.settings import Settings, get_settings

router = APIRouter()

@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    헬스체크 + 현재 시각 / 모델 / API 키 설정 여부 반환
    (키 값 자체는 노출하지 않음)
    """
    return {
        "status": "ok",
        "datetime": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "model": settings.OPENAI_MODEL,
        "api_key_configured": bool(settings.OPENAI_API_KEY),
    }
