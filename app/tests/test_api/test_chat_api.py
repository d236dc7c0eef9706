import openai
import pytest

from app.ai_pipeline.chatbot.errors import USER_MESSAGES
from app.ai_pipeline.prompts.assistant_prompt import QUICK_RESPONSES
from app.config.constants import CORS_HEADERS, ErrorKind
from app.tests.fakes import FakeLLMClient, provider_response

CHAT_URL = "/api/ai-chatbot"


def assert_cors(response):
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


# ==================== Method / Preflight ====================

@pytest.mark.parametrize("api_key", ["sk-test", None])
def test_options_preflight_always_ok(make_client, api_key):
    client = make_client(OPENAI_API_KEY=api_key)

    response = client.options(CHAT_URL)

    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE"])
def test_other_methods_not_allowed(make_client, method):
    client = make_client()

    response = client.request(method, CHAT_URL)

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert_cors(response)


def test_head_not_allowed_keeps_cors_headers(make_client):
    client = make_client()

    response = client.request("HEAD", CHAT_URL)

    assert response.status_code == 405
    assert_cors(response)


def test_missing_api_key_short_circuits(make_client, fake_llm):
    client = make_client(OPENAI_API_KEY=None)

    response = client.post(CHAT_URL, json={"message": "색상 대비 기준이 뭔가요?"})

    assert response.status_code == 503
    assert response.json()["error"] == "AI 서비스 설정 오류"
    assert fake_llm.calls == []


# ==================== Validation ====================

@pytest.mark.parametrize(
    "payload",
    [{}, {"message": ""}, {"message": "   "}, {"message": 123}, ["message"]],
)
def test_message_required(make_client, fake_llm, payload):
    client = make_client()

    response = client.post(CHAT_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "메시지가 필요합니다."
    assert fake_llm.calls == []


def test_message_too_long(make_client, fake_llm):
    client = make_client()

    response = client.post(CHAT_URL, json={"message": "안녕" + "가" * 1999})

    assert response.status_code == 400
    assert response.json()["error"] == "메시지가 너무 깁니다."
    assert fake_llm.calls == []


def test_invalid_json_body(make_client):
    client = make_client()

    response = client.post(
        CHAT_URL, content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert_cors(response)


def test_invalid_history_shape(make_client, fake_llm):
    client = make_client()

    response = client.post(
        CHAT_URL,
        json={"message": "질문", "history": [{"role": "tool", "content": "x"}]},
    )

    assert response.status_code == 400
    assert fake_llm.calls == []


# ==================== Quick response ====================

def test_quick_response_skips_upstream(make_client, fake_llm):
    client = make_client()

    response = client.post(CHAT_URL, json={"message": "안녕하세요, 질문이 있어요"})

    body = response.json()
    assert response.status_code == 200
    assert body["reply"] == QUICK_RESPONSES["안녕"]
    assert body["isQuickResponse"] is True
    assert body["timestamp"].endswith("Z")
    assert fake_llm.calls == []


# ==================== Upstream ====================

def test_end_to_end_reply_with_metadata(make_client, fake_llm):
    client = make_client()

    response = client.post(CHAT_URL, json={"message": "색상 대비 기준이 뭔가요?"})

    body = response.json()
    assert response.status_code == 200
    assert body["reply"] == "대비율은 4.5:1 이상을 권장합니다."
    assert body["metadata"]["model"] == "gpt-3.5-turbo"
    assert isinstance(body["metadata"]["responseTime"], int)
    assert body["metadata"]["usage"]["total_tokens"] == 162
    assert "isQuickResponse" not in body
    assert_cors(response)

    messages, _ = fake_llm.calls[0]
    assert messages[-1].content == "색상 대비 기준이 뭔가요?"


def test_context_and_history_are_forwarded(make_client, fake_llm):
    client = make_client()
    history = [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"msg {i}"}
        for i in range(12)
    ]
    context = {
        "summary": {"score": 88, "grade": "B", "totalIssues": 1,
                    "criticalCount": 0, "warningCount": 1},
        "critical": [],
        "warnings": [{"rule": "color-contrast", "description": "대비 부족"}],
    }

    response = client.post(
        CHAT_URL,
        json={"message": "어떻게 고치나요?", "context": context, "history": history},
    )

    assert response.status_code == 200
    messages, _ = fake_llm.calls[0]
    assert [m.role for m in messages[:2]] == ["system", "system"]
    assert "- color-contrast: 대비 부족" in messages[1].content
    assert [m.content for m in messages[2:-1]] == [f"msg {i}" for i in range(2, 12)]


def test_loosely_typed_context_is_rendered_as_is(make_client, fake_llm):
    client = make_client()
    context = {
        "summary": {"score": "91.5", "grade": 2, "totalIssues": "1",
                    "criticalCount": None, "warningCount": 1},
        "warnings": [{"rule": 1411, "description": None}],
    }

    response = client.post(CHAT_URL, json={"message": "이 결과 어때요?", "context": context})

    assert response.status_code == 200
    messages, _ = fake_llm.calls[0]
    assert "- 접근성 점수: 91.5/100" in messages[1].content
    assert "- 등급: 2" in messages[1].content
    assert "- 1411: None" in messages[1].content


def test_netlify_function_path(make_client):
    client = make_client()

    response = client.post("/.netlify/functions/ai-chatbot", json={"message": "대비 질문"})

    assert response.status_code == 200


def test_slow_upstream_returns_504(make_client):
    client = make_client(llm=FakeLLMClient(delay=1.0), CHAT_RESPONSE_TIMEOUT=0.05)

    response = client.post(CHAT_URL, json={"message": "느린 질문"})

    assert response.status_code == 504
    assert response.json()["message"] == USER_MESSAGES[ErrorKind.TIMEOUT]


@pytest.mark.parametrize(
    "error, status_code",
    [
        (openai.RateLimitError("Rate limit reached", response=provider_response(429), body=None), 429),
        (openai.AuthenticationError("Incorrect API key", response=provider_response(401), body=None), 503),
        (RuntimeError("boom"), 500),
    ],
)
def test_upstream_errors_map_to_status(make_client, error, status_code):
    client = make_client(llm=FakeLLMClient(error=error))

    response = client.post(CHAT_URL, json={"message": "질문"})

    body = response.json()
    assert response.status_code == status_code
    assert body["error"] == "AI 서비스 오류"
    assert "stack" not in body
    assert "details" not in body


def test_development_mode_includes_details(make_client):
    client = make_client(llm=FakeLLMClient(error=RuntimeError("boom")), APP_ENV="development")

    response = client.post(CHAT_URL, json={"message": "질문"})

    body = response.json()
    assert response.status_code == 500
    assert body["message"] == USER_MESSAGES[ErrorKind.UPSTREAM]
    assert body["details"] == "RuntimeError: boom"
    assert "ChatbotError" in body["stack"]
