"""
module: logger.py
description: loguru 기반 로깅 설정 (챗봇 요청/응답/오류 로그)
"""
from loguru import logger
import os

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

os.makedirs(LOG_DIR, exist_ok=True)
logger.add(f"{LOG_DIR}/chatbot.log", rotation="1 week", encoding="utf-8", level=LOG_LEVEL)
