from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.ai_pipeline.chatbot.service import AccessibilityAssistant
from app.api.chat_api import get_assistant_builder
from app.config.settings import Settings, get_settings
from app.main import app
from app.tests.fakes import FakeLLMClient


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def make_client(fake_llm):
    """설정/LLM 대역을 주입한 TestClient 생성기."""

    def _make(llm: Optional[FakeLLMClient] = None, **overrides) -> TestClient:
        values = {"OPENAI_API_KEY": "sk-test", "APP_ENV": "production"}
        values.update(overrides)
        settings = Settings(_env_file=None, **values)
        llm_client = llm or fake_llm

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_assistant_builder] = lambda: (
            lambda s: AccessibilityAssistant(llm_client, timeout=s.CHAT_RESPONSE_TIMEOUT)
        )
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
