from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status, 'ok' when serving")
    database: str = Field(description="Database connectivity as seen by the API")
    timestamp: str


class VideoCourse(BaseModel):
    id: str
    title: str
    category: str | None = None
    duration_minutes: int = 0
    is_active: bool = True
    lesson_count: int = 0
    enrollment_count: int = 0


class SimuladoCount(BaseModel):
    questions: int = 0
    attempts: int = 0


class Simulado(BaseModel):
    id: str
    title: str
    difficulty: str | None = None
    duration_minutes: int = 0
    total_questions: int = 0
    is_active: bool = True
    count: SimuladoCount = Field(default_factory=SimuladoCount, alias="_count")


class VideoCourseListResponse(BaseModel):
    success: bool
    data: list[VideoCourse]


class SimuladoListResponse(BaseModel):
    success: bool
    data: list[Simulado]


class PingResponse(BaseModel):
    success: bool
    message: str
