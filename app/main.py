import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.routers import ws
from app.routers.ws import RateLimiter
from app.services.game import MatchService
from app.services.websocket.manager import ConnectionManager

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Hero Skirmish API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    # The one match and its subscribers live for the lifetime of the app
    app.state.match_service = MatchService(allow_reinitialize=settings.ALLOW_REINITIALIZE)
    app.state.connection_manager = ConnectionManager()
    app.state.rate_limiter = RateLimiter(
        max_tokens=settings.WS_MAX_MESSAGES_PER_SECOND,
        window=settings.WS_RATE_LIMIT_WINDOW,
    )
    logger.info("Match service and WebSocket connection manager initialized")

    yield

    logger.info("Shutting down Hero Skirmish API")
    await app.state.connection_manager.close_all_connections()
    logger.info("WebSocket cleanup complete")


app = FastAPI(
    title="Hero Skirmish API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

app.include_router(ws.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/ws")


@app.get("/")
def root():
    return {"message": "Hero Skirmish API"}


@app.get("/health")
def health(request: Request):
    match: MatchService = request.app.state.match_service
    return {
        "status": "healthy",
        "phase": match.state.phase.value,
        "connections": request.app.state.connection_manager.get_total_connection_count(),
    }
