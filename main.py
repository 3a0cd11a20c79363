"""FastAPI entry point for the action stream agent service."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Action Stream Agent",
    description="Streaming LLM agent that executes writeToFile action blocks inline",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Populate tool registry (must happen before router import) ──
import tools  # noqa: E402, F401  - registers tools via @register_tool

# ── Register routers ────────────────────────────────────────
from api.chat import router as chat_router  # noqa: E402
from api.health import router as health_router  # noqa: E402
from api.tools_routes import router as tools_router  # noqa: E402

app.include_router(health_router)
app.include_router(tools_router)
app.include_router(chat_router)


if __name__ == "__main__":
    logger.info("Starting on port %d (debug=%s)", settings.service_port, settings.debug)
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.service_port,
        reload=settings.debug,
    )
