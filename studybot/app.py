# ============================================================
# StudyBot FastAPI App
# ------------------------------------------------------------
# One app serving every tutor endpoint:
#   - POST /                         plain prompt -> text
#   - POST /proxy                    styled prompt (mode/mood/personas)
#   - POST /api/chat                 tutor chat with history
#   - POST /api/generate-flashcards  structured flashcards
#   - POST /api/generate-quiz        structured quiz questions
# Settings are built once in create_app() and passed down via app.state.
# ============================================================

import logging
import time
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Local imports ---
from studybot.errors import ClientValidationError, StudyBotError, TransportError
from studybot.generate import ChatTurn, StudyGenerator
from studybot.settings import Settings, get_settings

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class PromptRequest(BaseModel):
    prompt: Optional[str] = None


class StyledRequest(BaseModel):
    message: Optional[str] = None
    topic: Optional[str] = None
    mode: Optional[str] = None
    mood: Optional[str] = None
    personas: Optional[List[str]] = None


class ChatRequest(BaseModel):
    message: Optional[str] = None
    topic: Optional[str] = None
    history: Optional[List[ChatTurn]] = None


class ArtifactRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: Optional[str] = None
    conversation_history: Optional[List[ChatTurn]] = Field(default=None, alias="conversationHistory")


def _generator(request: Request) -> StudyGenerator:
    return request.app.state.generator


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"Invalid request body: {loc} {msg}".strip() if loc else f"Invalid request body: {msg}"


# ------------------------------------------------------------
# 🚀 App factory
# ------------------------------------------------------------
def create_app(settings: Optional[Settings] = None, model_client=None) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings)

    app = FastAPI(title=f"{settings.APP_NAME} API", version="1.0")
    app.state.settings = settings
    app.state.generator = StudyGenerator(settings, model_client=model_client)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    # ------------------------------------------------------------
    # 🧯 Error envelopes
    # ------------------------------------------------------------
    @app.exception_handler(StudyBotError)
    async def handle_studybot_error(request: Request, exc: StudyBotError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(include_detail=not settings.is_production),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        err = ClientValidationError(_describe_validation_error(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        err = TransportError(detail=f"{type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=err.status_code,
            content=err.to_payload(include_detail=not settings.is_production),
        )

    # ------------------------------------------------------------
    # 💬 Text routes
    # ------------------------------------------------------------
    @app.get("/")
    def hello():
        return {"message": f"{settings.APP_NAME} AI backend is running. Use POST / to talk to the AI."}

    @app.post("/")
    def ask(req: PromptRequest, request: Request):
        return {"text": _generator(request).ask(req.prompt)}

    @app.post("/proxy")
    def proxy(req: StyledRequest, request: Request):
        reply = _generator(request).styled(req.message, req.topic, req.mode, req.mood, req.personas)
        return {"reply": reply}

    @app.post("/api/chat")
    def chat(req: ChatRequest, request: Request):
        return {"response": _generator(request).chat(req.message, req.topic, req.history)}

    # ------------------------------------------------------------
    # 🗂️ Structured routes
    # ------------------------------------------------------------
    @app.post("/api/generate-flashcards")
    def generate_flashcards(req: ArtifactRequest, request: Request):
        cards = _generator(request).flashcards(req.topic, req.conversation_history)
        return {"flashcards": [c.model_dump() for c in cards]}

    @app.post("/api/generate-quiz")
    def generate_quiz(req: ArtifactRequest, request: Request):
        questions = _generator(request).quiz(req.topic, req.conversation_history)
        return {"quizQuestions": [q.model_dump(by_alias=True) for q in questions]}

    # ------------------------------------------------------------
    # 🧭 Health checks
    # ------------------------------------------------------------
    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "uptime": round(time.monotonic() - app.state.started_at, 3),
            "env": settings.ENV,
            "model": settings.GEMINI_MODEL,
            "client": settings.AI_CLIENT,
            "apiKeyConfigured": settings.api_key_configured,
        }

    return app


app = create_app()
