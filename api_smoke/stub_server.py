import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI

from api_smoke.api_schemas import (
    HealthResponse,
    PingResponse,
    SimuladoListResponse,
    VideoCourseListResponse,
)

logger = logging.getLogger(__name__)

SAMPLE_VIDEO_COURSES = [
    {
        "id": "vc-1",
        "title": "Onboarding Essentials",
        "category": "onboarding",
        "duration_minutes": 45,
        "is_active": True,
        "lesson_count": 4,
        "enrollment_count": 12,
    },
    {
        "id": "vc-2",
        "title": "Workplace Safety",
        "category": "compliance",
        "duration_minutes": 30,
        "is_active": False,
        "lesson_count": 2,
        "enrollment_count": 0,
    },
]

SAMPLE_SIMULADOS = [
    {
        "id": "sim-1",
        "title": "Safety Basics Quiz",
        "difficulty": "facil",
        "duration_minutes": 30,
        "total_questions": 5,
        "is_active": True,
        "_count": {"questions": 5, "attempts": 3},
    },
]


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


app = FastAPI(
    title="API Smoke Stub Backend",
    version="1.0.0",
    description=(
        "Stand-in for the REST backend serving fixed sample data on the "
        "routes the smoke suites exercise."
    ),
)


@app.get(
    "/api/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by the availability probe.",
)
def health():
    return {"status": "ok", "database": "stub", "timestamp": utcnow_iso()}


@app.get(
    "/api/test",
    response_model=PingResponse,
    tags=["system"],
    summary="Test Endpoint",
)
def ping():
    return {"success": True, "message": "Test endpoint working"}


@app.get(
    "/api/video-courses",
    response_model=VideoCourseListResponse,
    tags=["content"],
    summary="Video Courses",
    description="Fixed list of sample video courses.",
)
def video_courses():
    logger.info("Serving %d stub video courses", len(SAMPLE_VIDEO_COURSES))
    return {"success": True, "data": SAMPLE_VIDEO_COURSES}


@app.get(
    "/api/simulados",
    response_model=SimuladoListResponse,
    response_model_by_alias=True,
    tags=["content"],
    summary="Simulados",
    description="Fixed list of sample practice exams.",
)
def simulados():
    logger.info("Serving %d stub simulados", len(SAMPLE_SIMULADOS))
    return {"success": True, "data": SAMPLE_SIMULADOS}


def serve(host: str = "127.0.0.1", port: int = 3001) -> None:
    uvicorn.run(app, host=host, port=port, log_level="warning")
