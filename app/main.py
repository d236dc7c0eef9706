from fastapi import FastAPI

from app.api import chat_api, health_api

app = FastAPI(
    title="Accessibility Design Assistant API",
    description="WCAG 2.1 / IRI 색채 시스템 디자인 팀장 챗봇 (OpenAI 연동)",
    version="1.0.0"
)

# CORS 헤더는 chat_api 가 모든 응답에 직접 붙인다 (preflight 빈 본문 유지)

# 챗봇 엔드포인트
app.include_router(chat_api.router, prefix="/api")
# 기존 정적 프론트엔드 호환 경로
app.include_router(chat_api.router, prefix="/.netlify/functions", include_in_schema=False)

app.include_router(health_api.router, prefix="/api", tags=["Health"])

@app.get("/")
def root():
    return {"message": "✅ Accessibility Design Assistant backend running!"}
