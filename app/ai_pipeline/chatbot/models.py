# chatbot/models.py
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    """LLM에 넘길 한 개의 메시지."""
    role: Literal["system", "user", "assistant"]
    content: str


class AnalysisIssue(BaseModel):
    """접근성 분석 결과의 이슈 한 건. 값은 타입 검사 없이 그대로 출력한다."""
    rule: Any = ""
    description: Any = ""


class AnalysisStats(BaseModel):
    """분석 요약 (점수/등급/이슈 개수). 포맷팅에만 쓰이므로 타입을 강제하지 않음."""
    model_config = ConfigDict(populate_by_name=True)

    score: Any = None
    grade: Any = None
    total_issues: Any = Field(default=None, alias="totalIssues")
    critical_count: Any = Field(default=None, alias="criticalCount")
    warning_count: Any = Field(default=None, alias="warningCount")


class AnalysisContext(BaseModel):
    """프론트에서 넘겨주는 접근성 분석 컨텍스트. 포맷팅 외에는 해석하지 않는다."""
    summary: Optional[AnalysisStats] = None
    critical: List[AnalysisIssue] = Field(default_factory=list)
    warnings: List[AnalysisIssue] = Field(default_factory=list)

    @field_validator("critical", "warnings", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class ChatRequest(BaseModel):
    """AI 서비스 입장에서 한 턴 입력 (요청마다 새로 생성, 저장하지 않음)."""
    message: str
    context: Optional[AnalysisContext] = None
    history: List[ChatMessage] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class AssistantReply(BaseModel):
    """generate_response 결과."""
    reply: str
    usage: Optional[Dict[str, Any]] = None
    model: str


class ResponseMetadata(BaseModel):
    model: str
    responseTime: int
    usage: Optional[Dict[str, Any]] = None
    timestamp: str


class ChatResponse(BaseModel):
    reply: str
    metadata: ResponseMetadata


class QuickChatResponse(BaseModel):
    reply: str
    isQuickResponse: bool = True
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
    stack: Optional[str] = None
    details: Optional[str] = None
